from __future__ import annotations
import os
from enum import Enum

from PyAutofill.AutofillError import ConfigurationError
from PyAutofill.Helpers.Localization import _

class CatalogFormat(Enum):
    XLIFF = 'xliff'
    YAML = 'yaml'
    JSON = 'json'
    PHP = 'php'

    @property
    def extensions(self) -> list[str]:
        """ File extensions recognised for the format (without the dot) """
        return format_extensions[self]

    def MatchesFile(self, path : str) -> bool:
        return GetExtension(path) in self.extensions

    @classmethod
    def FromName(cls, name : str|None) -> CatalogFormat:
        """
        Look up a format by its name, raising a ConfigurationError for unknown formats
        """
        try:
            return cls((name or '').strip().lower())
        except ValueError:
            names = ', '.join(fmt.value for fmt in cls)
            raise ConfigurationError(_("Unknown translation format '{name}' (expected one of {names})").format(name=name, names=names))

    @classmethod
    def Detect(cls, path : str) -> CatalogFormat:
        """
        Detect the format of a catalog file from its extension, defaulting to XLIFF
        """
        extension = GetExtension(path)
        for fmt, extensions in format_extensions.items():
            if extension in extensions:
                return fmt
        return cls.XLIFF

format_extensions : dict[CatalogFormat, list[str]] = {
    CatalogFormat.XLIFF: ['xlf', 'xliff'],
    CatalogFormat.YAML: ['yaml', 'yml'],
    CatalogFormat.JSON: ['json'],
    CatalogFormat.PHP: ['php'],
}

def GetExtension(path : str) -> str:
    """ The lower-case file extension without the dot """
    return os.path.splitext(path)[1].lstrip('.').lower()
