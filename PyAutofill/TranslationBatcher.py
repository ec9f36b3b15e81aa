import logging

from PyAutofill.AutofillError import ProviderError, TranslationError, TranslationResponseError
from PyAutofill.AutofillEvents import AutofillEvents
from PyAutofill.Helpers.Localization import _
from PyAutofill.Helpers.Settings import GetIntSetting
from PyAutofill.Options import MAX_BATCH_SIZE
from PyAutofill.SettingsType import SettingsType
from PyAutofill.TranslationClient import TranslationClient, TranslationUsage

class TranslationBatcher:
    """
    Sends keyed texts to the translation client in batches and reassembles the results by key
    """
    def __init__(self, client : TranslationClient, settings : SettingsType|None = None):
        self.client : TranslationClient = client
        self.events = AutofillEvents()

        batch_size = GetIntSetting(settings or {}, 'batch_size') or MAX_BATCH_SIZE
        self.batch_size : int = max(1, min(batch_size, MAX_BATCH_SIZE))

    def Translate(self, texts : dict[str,str], source_locale : str, target_locale : str) -> dict[str,str]:
        """
        Translate a mapping of key -> text, returning key -> translation.

        Either every text is translated or an error is raised; no partial result is returned.

        Raises:
            ProviderError: If the provider fails or returns the wrong number of translations
        """
        if not texts:
            return {}

        items = list(texts.items())
        batches = [ items[i:i + self.batch_size] for i in range(0, len(items), self.batch_size) ]

        translations : dict[str,str] = {}

        for batch_number, batch in enumerate(batches, start=1):
            logging.debug(f"Translating batch {batch_number} of {len(batches)} ({len(batch)} texts) to {target_locale}")

            try:
                results = self.client.TranslateBatch([ text for key, text in batch ], source_locale, target_locale)

            except ProviderError:
                raise

            except Exception as e:
                raise TranslationError(_("Translation failed: {}").format(str(e)), self.client, e)

            if results is None or len(results) != len(batch):
                received = len(results) if results is not None else 0
                raise TranslationResponseError(_("Expected {expected} translations, received {received}").format(expected=len(batch), received=received), response=results)

            for (key, text), translation in zip(batch, results):
                translations[key] = translation

            self.events.batch_translated(target_locale, batch_number, len(batches), len(translations))

        return translations

    def GetUsage(self) -> TranslationUsage:
        return self.client.GetUsage()
