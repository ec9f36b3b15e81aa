from abc import ABC, abstractmethod
from typing import Any

from PyAutofill.Catalog import Catalog
from PyAutofill.AutofillError import CatalogParseError
from PyAutofill.Helpers.Localization import _

class CatalogFileHandler(ABC):
    """
    Abstract interface for reading and writing catalog files.
    Implementations handle format-specific operations while the reconciliation
    logic stays format-agnostic.
    """

    def load_file(self, path : str, locale : str, domain : str = 'messages') -> Catalog:
        """
        Read a catalog file from disk.

        Raises:
            CatalogParseError: If the file cannot be read or parsed
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()

        except (OSError, UnicodeDecodeError) as e:
            raise CatalogParseError(_("Unable to read {path}: {error}").format(path=path, error=str(e)), e)

        return self.parse_string(content, locale, domain)

    @abstractmethod
    def parse_string(self, content : str, locale : str, domain : str = 'messages') -> Catalog:
        """
        Parse catalog file content into a Catalog.

        Args:
            content: String content to parse
            locale: Locale of the catalog
            domain: Translation domain of the catalog

        Returns:
            Catalog: The parsed messages, with metadata where the format has any

        Raises:
            CatalogParseError: If content cannot be parsed
        """
        pass

    @abstractmethod
    def compose_catalog(self, catalog : Catalog, options : dict[str,Any]|None = None) -> str:
        """
        Compose a catalog into file format string.

        Args:
            catalog: Catalog to compose
            options: Format options (default_locale, target_extension)

        Returns:
            str: Formatted catalog content
        """
        pass

    @abstractmethod
    def get_file_extensions(self) -> list[str]:
        """
        Get file extensions supported by this handler, preferred extension first.

        Returns:
            list[str]: List of file extensions (e.g., ['xlf', 'xliff'])
        """
        pass

def FlattenMessages(messages : dict[str,Any], prefix : str = '') -> dict[str,str]:
    """
    Flatten nested message trees into dotted keys, e.g. {'a': {'b': 'x'}} -> {'a.b': 'x'}
    """
    flattened : dict[str,str] = {}
    for key, value in messages.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flattened.update(FlattenMessages(value, full_key))
        elif value is None:
            flattened[full_key] = ''
        elif isinstance(value, bool):
            flattened[full_key] = 'true' if value else 'false'
        else:
            flattened[full_key] = str(value)

    return flattened
