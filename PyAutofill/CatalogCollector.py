import logging
import os

from PyAutofill.CatalogFormat import CatalogFormat
from PyAutofill.Helpers.Localization import _

class CatalogCollector:
    """
    Finds catalog files under a set of paths, grouped by format and directory
    """
    def __init__(self, formats : list[CatalogFormat]|None = None):
        self.formats : list[CatalogFormat] = formats or list(CatalogFormat)

    def Collect(self, paths : list[str], recursive : bool = True) -> dict[CatalogFormat, dict[str, list[str]]]:
        """
        Collect catalog files from files and directories.

        Returns:
            dict: format -> directory -> list of file paths, in sorted order.
            Formats and directories without files are omitted.
        """
        collected : dict[CatalogFormat, dict[str, list[str]]] = {}

        for path in paths:
            if os.path.isfile(path):
                self._add_file(collected, path)

            elif os.path.isdir(path):
                for directory, filenames in self._walk(path, recursive):
                    for filename in sorted(filenames):
                        self._add_file(collected, os.path.join(directory, filename))

            else:
                logging.warning(_("Path not found: {}").format(path))

        return collected

    def _walk(self, root : str, recursive : bool):
        if not recursive:
            filenames = [ name for name in os.listdir(root) if os.path.isfile(os.path.join(root, name)) ]
            yield root, filenames
            return

        for directory, subdirectories, filenames in os.walk(root):
            subdirectories[:] = sorted(name for name in subdirectories if not name.startswith('.'))
            yield directory, filenames

    def _add_file(self, collected : dict[CatalogFormat, dict[str, list[str]]], path : str):
        for fmt in self.formats:
            if fmt.MatchesFile(path):
                directory = os.path.dirname(os.path.abspath(path))
                collected.setdefault(fmt, {}).setdefault(directory, []).append(os.path.abspath(path))
                return
