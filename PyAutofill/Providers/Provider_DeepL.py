import os
from copy import deepcopy

from PyAutofill.Helpers.Localization import _
from PyAutofill.Providers.DeepL.DeepLClient import DeepLClient
from PyAutofill.SettingsType import SettingsType
from PyAutofill.TranslationClient import TranslationClient
from PyAutofill.TranslationProvider import TranslationProvider

class Provider_DeepL(TranslationProvider):
    name = "DeepL"

    def __init__(self, settings : SettingsType):
        settings = SettingsType(settings)
        super().__init__(self.name, SettingsType({
            'api_key': settings.get_str('api_key', os.getenv('DEEPL_API_KEY')),
            'server_url': settings.get_str('server_url', os.getenv('DEEPL_SERVER_URL')),
        }))

    @property
    def api_key(self) -> str|None:
        return self.settings.get_str('api_key')

    @property
    def server_url(self) -> str|None:
        return self.settings.get_str('server_url')

    def GetTranslationClient(self, settings : SettingsType|None = None) -> TranslationClient:
        client_settings = SettingsType(deepcopy(self.settings))
        client_settings.update(settings or {})
        return DeepLClient(client_settings)

    def ValidateSettings(self) -> bool:
        """
        Validate the settings for the provider
        """
        if not self.api_key:
            self.validation_message = _("DeepL API key is required. Provide via --api-key or DEEPL_API_KEY environment variable.")
            return False

        self.validation_message = None
        return True
