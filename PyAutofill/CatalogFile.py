from __future__ import annotations
import os
from dataclasses import dataclass, field

from PyAutofill.CatalogFormat import CatalogFormat
from PyAutofill.ConventionResolver import ConventionResolver

@dataclass(frozen=True)
class CatalogFile:
    """
    A discovered catalog file. Two files are the same if they have the same absolute path.
    """
    path : str
    locale : str|None = field(default=None, compare=False)
    domain : str = field(default='messages', compare=False)
    format : CatalogFormat = field(default=CatalogFormat.XLIFF, compare=False)

    @classmethod
    def FromPath(cls, path : str, fmt : CatalogFormat|None = None) -> CatalogFile:
        """
        Create a CatalogFile, inferring locale, domain and format from the filename
        """
        path = os.path.abspath(path)
        return cls(
            path=path,
            locale=ConventionResolver.ExtractLocale(path),
            domain=ConventionResolver.ExtractDomain(path),
            format=fmt or CatalogFormat.Detect(path)
        )

    def __str__(self) -> str:
        return self.path
