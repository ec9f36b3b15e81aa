from __future__ import annotations
import logging
import os
from collections.abc import Iterator

from PyAutofill.CatalogFile import CatalogFile
from PyAutofill.CatalogService import CatalogService
from PyAutofill.ConventionResolver import ConventionResolver

class DiffResult:
    """
    The missing keys for each requested target locale, in request order.
    Keys are listed in the order they appear in the source catalog.
    """
    def __init__(self, target_locales : list[str]|None = None):
        self.missing : dict[str, list[str]] = { locale: [] for locale in target_locales or [] }
        self.source_path : str|None = None
        self.target_paths : dict[str, str] = {}

    @property
    def locales(self) -> list[str]:
        return list(self.missing.keys())

    @property
    def total(self) -> int:
        return sum(len(keys) for keys in self.missing.values())

    def IsComplete(self) -> bool:
        return self.total == 0

    def items(self) -> Iterator[tuple[str, list[str]]]:
        return iter(self.missing.items())

    def __repr__(self) -> str:
        return f"DiffResult({', '.join(f'{locale}: {len(keys)}' for locale, keys in self.missing.items())})"

class CatalogDiffer:
    """
    Computes which source keys are missing or empty in each target catalog
    """
    def __init__(self, service : CatalogService|None = None):
        self.service = service or CatalogService()

    def Diff(self, files : list[CatalogFile]|list[str], source_locale : str, target_locales : list[str], domain : str = 'messages') -> DiffResult:
        """
        Compare the source catalog with the catalog for each target locale.

        Target files that do not exist yet (including paths synthesized from the
        source file's naming convention) are missing every source key.

        Raises:
            CatalogParseError: If a catalog file cannot be parsed
        """
        result = DiffResult(target_locales)

        resolver = ConventionResolver([ str(file) for file in files ])
        source_path = resolver.FindSourceFile(source_locale, domain)
        if source_path is None:
            logging.debug(f"No source file for locale {source_locale} and domain {domain}")
            return result

        result.source_path = source_path

        source = self.service.LoadCatalog(source_path, source_locale, domain)
        source_keys = source.keys

        for locale in result.locales:
            target_path = resolver.FindTargetFile(locale, domain, source_path)
            result.target_paths[locale] = target_path

            if not os.path.exists(target_path):
                logging.debug(f"{target_path} does not exist, all {len(source_keys)} keys are missing for {locale}")
                result.missing[locale] = list(source_keys)
                continue

            target = self.service.LoadCatalog(target_path, locale, domain)
            result.missing[locale] = [ key for key in source_keys if not target.IsTranslated(key) ]

        return result
