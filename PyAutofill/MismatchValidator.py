import logging
import os
from dataclasses import dataclass, field

from PyAutofill.CatalogService import CatalogService
from PyAutofill.ConventionResolver import ConventionResolver

@dataclass
class MismatchIssue:
    """
    A key that is defined in some catalogs of a group but not in others.
    `files` lists every file in the group with its value, or None where the key is absent.
    """
    key : str
    files : list[tuple[str, str|None]] = field(default_factory=list)

    @property
    def missing_files(self) -> list[str]:
        return [ path for path, value in self.files if value is None ]

    def __str__(self) -> str:
        return f"{self.key}: missing in {', '.join(os.path.basename(path) for path in self.missing_files)}"

class MismatchValidator:
    """
    Compares the key sets of catalogs for the same domain in the same directory
    """
    def __init__(self, service : CatalogService|None = None):
        self.service = service or CatalogService()

    def Validate(self, files : list[str]) -> list[MismatchIssue]:
        issues : list[MismatchIssue] = []

        for group in self._group_files(files).values():
            if len(group) < 2:
                continue

            catalogs = []
            for path in group:
                domain = ConventionResolver.ExtractDomain(path)
                locale = ConventionResolver.ExtractLocale(path) or ''
                catalogs.append((path, self.service.LoadCatalog(path, locale, domain)))

            all_keys : dict[str,None] = {}
            for path, catalog in catalogs:
                all_keys.update(dict.fromkeys(catalog.keys))

            for key in all_keys:
                values = [ (path, catalog.Get(key)) for path, catalog in catalogs ]
                if any(value is None for path, value in values):
                    issues.append(MismatchIssue(key, values))

        logging.debug(f"Mismatch validation found {len(issues)} issue(s) in {len(files)} file(s)")
        return issues

    def _group_files(self, files : list[str]) -> dict[tuple[str,str], list[str]]:
        groups : dict[tuple[str,str], list[str]] = {}
        for path in files:
            key = (os.path.dirname(os.path.abspath(path)), ConventionResolver.ExtractDomain(path))
            groups.setdefault(key, []).append(str(path))
        return groups
