import logging

import deepl

from PyAutofill.AutofillError import ProviderConfigurationError, ProviderError, TranslationError, TranslationResponseError
from PyAutofill.Helpers.Localization import _
from PyAutofill.SettingsType import SettingsType
from PyAutofill.TranslationClient import TranslationClient, TranslationUsage

# Target languages that DeepL only accepts with a regional variant
default_target_variants = {
    'EN': 'EN-US',
    'PT': 'PT-PT',
}

def NormaliseSourceLanguage(locale : str) -> str:
    """
    DeepL source languages are bare language codes, e.g. 'en_GB' -> 'EN'
    """
    return locale.replace('_', '-').split('-')[0].upper()

def NormaliseTargetLanguage(locale : str) -> str:
    """
    Convert a catalog locale to a DeepL target language code, e.g. 'de' -> 'DE', 'pt_br' -> 'PT-BR', 'en' -> 'EN-US'
    """
    code = locale.replace('_', '-').upper()
    return default_target_variants.get(code, code)

class DeepLClient(TranslationClient):
    """
    Handles communication with the DeepL API to request translations
    """
    def __init__(self, settings : SettingsType):
        super().__init__(settings)

        if not self.api_key:
            raise ProviderConfigurationError(_("DeepL API key is required"), self)

        try:
            self.translator = deepl.Translator(self.api_key, server_url=self.server_url)

        except (deepl.DeepLException, ValueError) as e:
            raise ProviderConfigurationError(_("Failed to initialize DeepL translator: {}").format(str(e)), self, e)

        if self.server_url:
            logging.info(_("Translating with DeepL server at {}").format(self.server_url))

    @property
    def name(self) -> str:
        return "DeepL"

    @property
    def api_key(self) -> str|None:
        return self.settings.get_str('api_key')

    @property
    def server_url(self) -> str|None:
        return self.settings.get_str('server_url') or None

    def TranslateBatch(self, texts : list[str], source_locale : str, target_locale : str) -> list[str]:
        if not texts:
            return []

        source_lang = NormaliseSourceLanguage(source_locale)
        target_lang = NormaliseTargetLanguage(target_locale)
        logging.debug(f"Requesting {len(texts)} translations from DeepL ({source_lang} -> {target_lang})")

        try:
            results = self.translator.translate_text(texts, source_lang=source_lang, target_lang=target_lang)

        except deepl.AuthorizationException as e:
            raise ProviderConfigurationError(_("DeepL rejected the API key: {}").format(str(e)), self, e)

        except deepl.DeepLException as e:
            raise TranslationError(_("Translation failed: {}").format(str(e)), self, e)

        if not isinstance(results, list):
            results = [ results ]

        if len(results) != len(texts):
            raise TranslationResponseError(_("DeepL returned {received} translations for {sent} texts").format(received=len(results), sent=len(texts)), response=results)

        return [ result.text for result in results ]

    def GetUsage(self) -> TranslationUsage:
        try:
            usage = self.translator.get_usage()

        except deepl.DeepLException as e:
            raise ProviderError(_("Unable to retrieve DeepL usage: {}").format(str(e)), self, e)

        character = usage.character
        if character is None:
            return TranslationUsage()

        return TranslationUsage(character.count or 0, character.limit or 0)
