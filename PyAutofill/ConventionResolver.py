"""
Resolve catalog file names from the naming convention a project already uses.

Three shapes are recognised, checked in this order:

    messages.de.xlf     domain first (Symfony, TYPO3 v11+)
    de.locallang.xlf    locale first (TYPO3 v10)
    locallang.xlf       no locale, the implicit source file

The order matters for names that fit more than one shape, e.g. `de.en.xlf` is
read as domain `de`, locale `en`.
"""
from __future__ import annotations
import os
from enum import Enum

import regex

from PyAutofill.AutofillError import CatalogMergeError
from PyAutofill.Helpers.Localization import _

_embedded_locale_pattern = regex.compile(r'\.([a-z]{2})\.')
_leading_locale_pattern = regex.compile(r'^([a-z]{2})\.')
_trailing_locale_pattern = regex.compile(r'\.([a-z]{2})$')
_domain_first_pattern = regex.compile(r'^(.+)\.([a-z]{2})\.([^.]+)$')
_locale_first_pattern = regex.compile(r'^[a-z]{2}\.(.+)$')

class NamingConvention(Enum):
    DomainFirst = 'domain-first'
    LocaleFirst = 'locale-first'
    NoLocale = 'no-locale'

class ConventionResolver:
    """
    Finds the source and target catalog files for a locale and domain among a set of discovered files
    """
    def __init__(self, paths : list[str]):
        self.paths : list[str] = list(paths)

    @staticmethod
    def ExtractLocale(filename : str) -> str|None:
        """
        Extract the two-letter locale from a catalog filename, or None if it has no locale segment
        """
        basename = os.path.basename(filename)

        match = _embedded_locale_pattern.search(basename)
        if match:
            return match.group(1)

        match = _leading_locale_pattern.match(basename)
        if match:
            return match.group(1)

        match = _trailing_locale_pattern.search(basename)
        if match:
            return match.group(1)

        return None

    @staticmethod
    def MatchesLocaleAndDomain(filename : str, locale : str, domain : str) -> bool:
        basename = os.path.basename(filename)
        return f"{domain}.{locale}." in basename or f"{locale}.{domain}." in basename or basename == f"{domain}.{locale}"

    @staticmethod
    def DetectConvention(filename : str) -> NamingConvention:
        basename = os.path.basename(filename)
        if _domain_first_pattern.match(basename):
            return NamingConvention.DomainFirst

        if _locale_first_pattern.match(basename):
            return NamingConvention.LocaleFirst

        return NamingConvention.NoLocale

    @staticmethod
    def ExtractDomain(filename : str) -> str:
        """
        The domain part of a catalog filename, following its naming convention
        """
        basename = os.path.basename(filename)

        match = _domain_first_pattern.match(basename)
        if match:
            return match.group(1)

        match = _locale_first_pattern.match(basename)
        if match:
            return os.path.splitext(match.group(1))[0]

        return os.path.splitext(basename)[0]

    @staticmethod
    def SynthesizeTargetPath(source_path : str, locale : str) -> str:
        """
        Generate the path a catalog for the locale would have, using the source file's convention.
        Files without a locale get the locale inserted before the extension.
        """
        directory = os.path.dirname(source_path)
        basename = os.path.basename(source_path)

        match = _domain_first_pattern.match(basename)
        if match:
            domain, dummy, extension = match.groups() # type: ignore[unused-ignore]
            return os.path.join(directory, f"{domain}.{locale}.{extension}")

        match = _locale_first_pattern.match(basename)
        if match:
            return os.path.join(directory, f"{locale}.{match.group(1)}")

        name, extension = os.path.splitext(basename)
        if not extension:
            return os.path.join(directory, f"{name}.{locale}")

        return os.path.join(directory, f"{name}.{locale}{extension}")

    def FindSourceFile(self, locale : str, domain : str) -> str|None:
        """
        Find the file for the source locale, falling back to the first file without a locale in its name
        """
        for path in self.paths:
            if self.MatchesLocaleAndDomain(path, locale, domain):
                return path

        for path in self.paths:
            if self.ExtractLocale(path) is None:
                return path

        return None

    def FindMatchingFile(self, locale : str, domain : str) -> str|None:
        """
        Find an existing file for the locale and domain
        """
        for path in self.paths:
            if self.MatchesLocaleAndDomain(path, locale, domain):
                return path

        return None

    def FindTargetFile(self, locale : str, domain : str, source_path : str|None) -> str:
        """
        Find the file for a target locale, or generate the path it should have
        """
        path = self.FindMatchingFile(locale, domain)
        if path:
            return path

        if source_path is None:
            raise CatalogMergeError(_("Source file is required to generate target file path"), locale=locale)

        return self.SynthesizeTargetPath(source_path, locale)
