from __future__ import annotations
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from PyAutofill.AutofillError import CatalogParseError, ConfigurationError, DiscoveryError
from PyAutofill.AutofillEvents import AutofillEvents
from PyAutofill.CatalogCollector import CatalogCollector
from PyAutofill.CatalogDiffer import CatalogDiffer, DiffResult
from PyAutofill.CatalogFile import CatalogFile
from PyAutofill.CatalogFormat import CatalogFormat, GetExtension
from PyAutofill.CatalogMerger import CatalogMerger
from PyAutofill.CatalogService import CatalogService
from PyAutofill.ConventionResolver import ConventionResolver
from PyAutofill.Helpers.Localization import _, get_locale_display_name
from PyAutofill.MismatchValidator import MismatchValidator
from PyAutofill.Options import Options
from PyAutofill.TranslationBatcher import TranslationBatcher
from PyAutofill.TranslationClient import TranslationClient, TranslationUsage
from PyAutofill.TranslationProvider import TranslationProvider

# Number of keys listed per locale in a dry run
DRY_RUN_PREVIEW_KEYS = 10

class AutofillStatus(Enum):
    Complete = 'complete'
    DryRun = 'dry-run'
    Cancelled = 'cancelled'
    Translated = 'translated'

@dataclass
class AutofillResult:
    status : AutofillStatus
    diff : DiffResult|None = None
    translated_count : int = 0
    locales : list[str] = field(default_factory=list)
    written_files : list[str] = field(default_factory=list)
    usage : TranslationUsage|None = None

class AutofillPipeline:
    """
    Finds missing translations in a set of catalogs, translates them and writes them back.

    The run is sequential: discover the catalog files, compute the missing keys
    for each target locale, then (unless this is a dry run or the user declines)
    translate and save one locale at a time. A provider failure stops the run;
    catalogs already written for earlier locales are kept.
    """
    def __init__(self, options : Options, client : TranslationClient|None = None, confirm : Callable[[], bool]|None = None,
                 service : CatalogService|None = None):
        self.options : Options = options
        self.client : TranslationClient|None = client
        self.confirm : Callable[[], bool]|None = confirm
        self.events = AutofillEvents()
        self.service : CatalogService = service or CatalogService()
        self.differ = CatalogDiffer(self.service)
        self.merger = CatalogMerger(options.provider or 'DeepL')
        self.provider : TranslationProvider|None = None

    def Run(self) -> AutofillResult:
        """
        Execute the full autofill workflow.

        Raises:
            ConfigurationError: If the options are incomplete or invalid
            DiscoveryError: If no catalog files are found
            ProviderError: If translation fails
        """
        fmt = self.ValidateOptions()

        if self.options.dry_run:
            logging.info(_("DRY RUN MODE - No files will be modified"))

        logging.info(_("Scanning for translation files..."))
        files = self.DiscoverFiles(self.options.path, fmt)
        logging.info(_("Found {} translation file(s)").format(len(files)))

        self._log_mismatches(files)

        logging.info(_("Validating translations..."))
        diff = self.differ.Diff(files, self.options.source_locale, self.options.target_locales, self.options.domain)

        if diff.IsComplete():
            logging.info(_("All translations are complete!"))
            return AutofillResult(AutofillStatus.Complete, diff)

        logging.info(_("Found {} missing translation(s)").format(diff.total))

        if self.options.dry_run:
            self.ReportDryRun(diff)
            return AutofillResult(AutofillStatus.DryRun, diff)

        if not self.options.force and not self._confirm():
            logging.warning(_("Operation cancelled by user."))
            return AutofillResult(AutofillStatus.Cancelled, diff)

        batcher = TranslationBatcher(self._get_client(), self.options)
        batcher.events.batch_translated += self._on_batch_translated # type: ignore

        result = AutofillResult(AutofillStatus.Translated, diff)

        try:
            for locale, missing_keys in diff.items():
                if not missing_keys:
                    continue

                translated_count = self.TranslateLocale(batcher, diff, locale, missing_keys, fmt, result)
                result.translated_count += translated_count

        finally:
            batcher.events.batch_translated -= self._on_batch_translated # type: ignore

        logging.info(_("Translation completed successfully"))
        logging.info(_("{count} key(s) translated in {locales} language(s)").format(count=result.translated_count, locales=len(result.locales)))

        result.usage = self._get_usage(batcher)
        if result.usage:
            logging.info(_("API Usage: {}").format(str(result.usage)))

        return result

    def ValidateOptions(self) -> CatalogFormat:
        """
        Check the options before touching any files, creating the provider unless a client was supplied.
        """
        if self.client is None:
            self.provider = TranslationProvider.get_provider(self.options)

        if not self.options.target_locales:
            raise ConfigurationError(_("At least one target locale is required. Use -t or --target-locales option."))

        return CatalogFormat.FromName(self.options.format)

    def DiscoverFiles(self, path : str, fmt : CatalogFormat) -> list[CatalogFile]:
        """
        A single catalog file, or every catalog file of the format found under a directory
        """
        if os.path.isfile(path):
            if not fmt.MatchesFile(path):
                raise DiscoveryError(_("File does not match format {format}: {path}").format(format=fmt.value, path=path), path)

            return [ CatalogFile.FromPath(path, fmt) ]

        collected = CatalogCollector().Collect([path], recursive=True)
        if not collected:
            raise DiscoveryError(_("No translation files found in: {}").format(path), path)

        paths = [ file for files in collected.get(fmt, {}).values() for file in files ]
        if not paths:
            raise DiscoveryError(_("No {format} translation files found in: {path}").format(format=fmt.value, path=path), path)

        return [ CatalogFile.FromPath(file, fmt) for file in paths ]

    def ReportDryRun(self, diff : DiffResult):
        for locale, keys in diff.items():
            if not keys:
                continue

            logging.info(_("Would translate {count} key(s) for locale {locale}:").format(count=len(keys), locale=locale))
            for key in keys[:DRY_RUN_PREVIEW_KEYS]:
                logging.info(f"  * {key}")

            if len(keys) > DRY_RUN_PREVIEW_KEYS:
                logging.info(_("... and {} more").format(len(keys) - DRY_RUN_PREVIEW_KEYS))

    def TranslateLocale(self, batcher : TranslationBatcher, diff : DiffResult, locale : str, missing_keys : list[str], fmt : CatalogFormat, result : AutofillResult) -> int:
        """
        Translate the missing keys for one locale and save the target catalog.
        Returns the number of keys translated.
        """
        source_locale = self.options.source_locale
        domain = self.options.domain

        logging.info(_("Translating to {language} ({locale})").format(language=get_locale_display_name(locale), locale=locale))

        source_path = diff.source_path
        if not source_path:
            logging.warning(_("Source file not found for locale {}").format(source_locale))
            return 0

        target_path = diff.target_paths.get(locale) or ConventionResolver([source_path]).FindTargetFile(locale, domain, source_path)

        source = self.service.LoadCatalog(source_path, source_locale, domain)
        target = self.service.LoadCatalog(target_path, locale, domain)

        self.merger.PrepareTarget(source, target)

        texts = self.merger.CollectTexts(source, missing_keys)
        if not texts:
            logging.warning(_("No valid texts to translate (all source texts are empty)"))
            return 0

        self.events.locale_started(locale, len(texts))

        translations = batcher.Translate(texts, source_locale, locale)

        if self.options.verbose:
            for key, translation in translations.items():
                logging.info(f"  {key}: \"{texts[key]}\" → \"{translation}\"")

        self.merger.ApplyTranslations(target, translations, self.options.mark_auto_translated, source_locale)

        written_path = self.service.SaveCatalog(target, fmt, target_path=target_path, default_locale=source_locale,
                                                target_extension=GetExtension(target_path))

        logging.info(_("Translated {} key(s)").format(len(translations)))
        logging.info(_("Saved to: {}").format(os.path.basename(written_path)))

        result.locales.append(locale)
        result.written_files.append(written_path)
        self.events.locale_completed(locale, len(translations), written_path)

        return len(translations)

    def _get_client(self) -> TranslationClient:
        if self.client is None:
            if self.provider is None:
                self.provider = TranslationProvider.get_provider(self.options)

            self.client = self.provider.GetTranslationClient()

        return self.client

    def _confirm(self) -> bool:
        if self.confirm is None:
            logging.warning(_("Translation files will be modified. Use --force to continue without confirmation."))
            return False

        return bool(self.confirm())

    def _get_usage(self, batcher : TranslationBatcher) -> TranslationUsage|None:
        try:
            return batcher.GetUsage()

        except Exception as e:
            logging.debug(f"Unable to retrieve usage: {str(e)}")
            return None

    def _log_mismatches(self, files : list[CatalogFile]):
        if not logging.getLogger().isEnabledFor(logging.DEBUG):
            return

        try:
            issues = MismatchValidator(self.service).Validate([ file.path for file in files ])

        except CatalogParseError as e:
            logging.debug(f"Mismatch validation skipped: {str(e)}")
            return

        for issue in issues:
            logging.debug(f"Mismatch: {str(issue)}")

    def _on_batch_translated(self, locale : str, batch_number : int, batch_count : int, translated_count : int):
        logging.debug(f"Batch {batch_number}/{batch_count} translated for {locale} ({translated_count} keys)")
        self.events.batch_translated(locale, batch_number, batch_count, translated_count)
