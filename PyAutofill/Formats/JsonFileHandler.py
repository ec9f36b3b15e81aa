import json
from typing import Any

from PyAutofill.Catalog import Catalog
from PyAutofill.CatalogFileHandler import CatalogFileHandler, FlattenMessages
from PyAutofill.AutofillError import CatalogParseError
from PyAutofill.Helpers.Localization import _

class JsonFileHandler(CatalogFileHandler):
    """
    File handler for JSON catalogs (a single object of keys to messages)
    """
    def parse_string(self, content : str, locale : str, domain : str = 'messages') -> Catalog:
        catalog = Catalog(locale, domain)
        if not content.strip():
            return catalog

        try:
            messages = json.loads(content)

        except json.JSONDecodeError as e:
            raise CatalogParseError(_("Failed to parse JSON: {}").format(str(e)), e)

        if not isinstance(messages, dict):
            raise CatalogParseError(_("JSON catalog must be an object of keys to messages"))

        for key, text in FlattenMessages(messages).items():
            catalog.Set(key, text)

        return catalog

    def compose_catalog(self, catalog : Catalog, options : dict[str,Any]|None = None) -> str:
        return json.dumps(catalog.entries, ensure_ascii=False, indent=4) + "\n"

    def get_file_extensions(self) -> list[str]:
        return ['json']
