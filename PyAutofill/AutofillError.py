from typing import Any

from PyAutofill.Helpers.Localization import _

class AutofillError(Exception):
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.error = error
        self.message = message

    def __str__(self) -> str:
        if self.error:
            return str(self.error)
        elif self.message:
            return self.message
        return super().__str__()

class ConfigurationError(AutofillError):
    """ Invalid or incomplete settings, reported before anything is touched """
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)

class DiscoveryError(AutofillError):
    def __init__(self, message : str, path : str|None = None):
        super().__init__(message)
        self.path = path

class NoProviderError(ConfigurationError):
    def __init__(self):
        super().__init__(_("Provider not specified in options"))

class ProviderError(AutofillError):
    def __init__(self, message : str|None = None, provider : Any = None, error : Exception|None = None):
        super().__init__(message, error)
        self.provider = provider

class ProviderConfigurationError(ProviderError):
    def __init__(self, message : str, provider : Any, error : Exception|None = None):
        super().__init__(message, provider, error)

class TranslationError(ProviderError):
    def __init__(self, message : str, provider : Any = None, error : Exception|None = None):
        super().__init__(message, provider, error)

class TranslationResponseError(TranslationError):
    def __init__(self, message : str, response : Any = None):
        super().__init__(message)
        self.response = response

class CatalogMergeError(AutofillError):
    def __init__(self, message : str, locale : str|None = None):
        super().__init__(message)
        self.locale = locale

class CatalogParseError(AutofillError):
    """Error raised when a catalog file cannot be parsed."""
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)

class CatalogWriteError(AutofillError):
    """Error raised when a catalog file cannot be written."""
    def __init__(self, message : str, path : str|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.path = path
