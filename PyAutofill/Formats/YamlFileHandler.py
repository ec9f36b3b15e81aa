from typing import Any

import yaml

from PyAutofill.Catalog import Catalog
from PyAutofill.CatalogFileHandler import CatalogFileHandler, FlattenMessages
from PyAutofill.AutofillError import CatalogParseError
from PyAutofill.Helpers.Localization import _

class YamlFileHandler(CatalogFileHandler):
    """
    File handler for YAML catalogs. Nested mappings are flattened to dotted keys
    when loading, and written back as flat keys.
    """
    def parse_string(self, content : str, locale : str, domain : str = 'messages') -> Catalog:
        try:
            messages = yaml.safe_load(content)

        except yaml.YAMLError as e:
            raise CatalogParseError(_("Failed to parse YAML: {}").format(str(e)), e)

        if messages is None:
            messages = {}

        if not isinstance(messages, dict):
            raise CatalogParseError(_("YAML catalog must be a mapping of keys to messages"))

        catalog = Catalog(locale, domain)
        for key, text in FlattenMessages(messages).items():
            catalog.Set(key, text)

        return catalog

    def compose_catalog(self, catalog : Catalog, options : dict[str,Any]|None = None) -> str:
        return yaml.safe_dump(dict(catalog.entries), allow_unicode=True, sort_keys=False, default_flow_style=False)

    def get_file_extensions(self) -> list[str]:
        return ['yml', 'yaml']
