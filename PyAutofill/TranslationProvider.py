import importlib
import logging
import pkgutil
from typing import cast

from PyAutofill.AutofillError import ConfigurationError, NoProviderError
from PyAutofill.Helpers.Localization import _
from PyAutofill.Options import Options
from PyAutofill.SettingsType import SettingsType
from PyAutofill.TranslationClient import TranslationClient

class TranslationProvider:
    """
    Base class for translation service providers.
    """
    name : str = ''

    _providers_imported : bool = False

    def __init__(self, name : str, settings : SettingsType):
        self.name : str = name
        self.settings : SettingsType = SettingsType(settings)
        self.validation_message : str|None = None

    def GetTranslationClient(self, settings : SettingsType|None = None) -> TranslationClient:
        """
        Returns a new instance of the translation client for this provider
        """
        raise NotImplementedError

    def ValidateSettings(self) -> bool:
        """
        Validate the settings for the provider
        """
        return True

    @classmethod
    def get_providers(cls) -> dict:
        """
        Return a dictionary of all available providers
        """
        if not TranslationProvider._providers_imported:
            TranslationProvider._providers_imported = True
            try:
                cls.import_providers(f"{__package__}.Providers")

            except ImportError as e:
                logging.error(f"Error importing providers: {str(e)}")

        providers = { cast(TranslationProvider, provider).name : provider for provider in TranslationProvider.__subclasses__() }

        return providers

    @classmethod
    def get_provider(cls, options : Options):
        """
        Create the provider named in the options and check that its settings are usable
        """
        if not isinstance(options, Options):
            raise ValueError("Options object required")

        if not options.provider:
            raise NoProviderError()

        translation_provider : TranslationProvider = cls.create_provider(options.provider, options)

        if not translation_provider.ValidateSettings():
            raise ConfigurationError(translation_provider.validation_message or _("Invalid settings for {}").format(options.provider))

        return translation_provider

    @classmethod
    def create_provider(cls, name : str, provider_settings : SettingsType):
        providers = cls.get_providers().items()
        for provider_name, provider in providers:
            if provider_name.lower() == name.lower():
                return provider(provider_settings)

        raise ConfigurationError(_("Unknown translation provider: {}").format(name))

    @classmethod
    def import_providers(cls, package_name : str):
        """
        Dynamically import all modules in the providers package.
        """
        package = importlib.import_module(package_name)
        for loader, module_name, is_pkg in pkgutil.iter_modules(package.__path__, package.__name__ + '.'): # type: ignore[ignore-unused]
            logging.debug(f"Importing provider: {module_name}")
            importlib.import_module(module_name)
