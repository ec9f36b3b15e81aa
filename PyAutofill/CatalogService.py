import logging
import os

from PyAutofill.Catalog import Catalog
from PyAutofill.CatalogFileHandler import CatalogFileHandler
from PyAutofill.CatalogFormat import CatalogFormat
from PyAutofill.AutofillError import AutofillError, CatalogWriteError
from PyAutofill.Formats.JsonFileHandler import JsonFileHandler
from PyAutofill.Formats.PhpFileHandler import PhpFileHandler
from PyAutofill.Formats.XliffFileHandler import XliffFileHandler
from PyAutofill.Formats.YamlFileHandler import YamlFileHandler
from PyAutofill.Helpers.Localization import _

class CatalogService:
    """
    Loads and saves catalogs, choosing the file handler for each format
    """
    handlers : dict[CatalogFormat, type[CatalogFileHandler]] = {
        CatalogFormat.XLIFF: XliffFileHandler,
        CatalogFormat.YAML: YamlFileHandler,
        CatalogFormat.JSON: JsonFileHandler,
        CatalogFormat.PHP: PhpFileHandler,
    }

    def GetHandler(self, fmt : CatalogFormat) -> CatalogFileHandler:
        return self.handlers[fmt]()

    def DetectFormat(self, path : str) -> CatalogFormat:
        return CatalogFormat.Detect(path)

    def LoadCatalog(self, path : str, locale : str, domain : str = 'messages') -> Catalog:
        """
        Load a catalog in the format given by its extension.
        A path that does not exist yet is an empty catalog.
        """
        if not os.path.exists(path):
            logging.debug(f"{path} does not exist, using an empty catalog for {locale}")
            return Catalog(locale, domain)

        handler = self.GetHandler(self.DetectFormat(path))
        return handler.load_file(path, locale, domain)

    def SaveCatalog(self, catalog : Catalog, fmt : CatalogFormat, target_path : str|None = None, output_dir : str|None = None,
                    default_locale : str|None = None, target_extension : str|None = None) -> str:
        """
        Write a catalog to the target path, or to `<domain>.<locale>.<ext>` in the output directory.

        Returns:
            str: The path that was written
        """
        handler = self.GetHandler(fmt)

        if not target_path:
            if not output_dir:
                raise AutofillError(_("No target path or output directory for the {} catalog").format(catalog.locale))

            extension = (target_extension or handler.get_file_extensions()[0]).lstrip('.')
            target_path = os.path.join(output_dir, f"{catalog.domain}.{catalog.locale}.{extension}")

        content = handler.compose_catalog(catalog, {
            'default_locale': default_locale or catalog.locale,
            'target_extension': target_extension,
        })

        target_path = os.path.normpath(target_path)
        logging.debug(f"Writing {len(catalog)} entries to {target_path}")

        try:
            directory = os.path.dirname(target_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(target_path, 'w', encoding='utf-8') as f:
                f.write(content)

        except OSError as e:
            raise CatalogWriteError(_("Unable to write {path}: {error}").format(path=target_path, error=str(e)), target_path, e)

        return target_path
