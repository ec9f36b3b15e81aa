from dataclasses import dataclass

from PyAutofill.Options import Options
from PyAutofill.SettingsType import SettingsType

@dataclass
class TranslationUsage:
    """
    Character usage reported by the translation provider
    """
    character_count : int = 0
    character_limit : int = 0

    @property
    def percentage(self) -> float:
        if self.character_limit <= 0:
            return 0.0
        return round(self.character_count / self.character_limit * 100, 2)

    def __str__(self) -> str:
        return f"{self.character_count:,} / {self.character_limit:,} characters ({self.percentage:.2f}%)"

class TranslationClient:
    """
    Handles communication with the translation provider
    """
    def __init__(self, settings : SettingsType):
        if isinstance(settings, Options):
            settings = settings.GetSettings()

        self.settings : SettingsType = SettingsType(settings)

    @property
    def name(self) -> str:
        return self.settings.get_str('provider') or type(self).__name__

    def TranslateBatch(self, texts : list[str], source_locale : str, target_locale : str) -> list[str]:
        """
        Translate a list of texts, returning the translations in the same order.
        Implementations should raise a ProviderError subclass on failure.
        """
        raise NotImplementedError

    def GetUsage(self) -> TranslationUsage:
        """
        Character usage for the account
        """
        raise NotImplementedError
