"""
Localization utilities using Python's gettext.

Messages shown to the user are wrapped in `_()`. Language names for locale
codes are resolved with Babel.
"""
from __future__ import annotations

import gettext
from typing import Optional

from babel import Locale, UnknownLocaleError

from PyAutofill.Helpers.Resources import GetResourcePath

_translator: Optional[gettext.NullTranslations] = None
_domain = 'deepl-autofill'


def _get_locale_dir() -> str:
    return GetResourcePath('locales')


def initialize_localization(language_code: Optional[str] = None) -> None:
    """
    Initialize the gettext translation system.

    Falls back to NullTranslations when no message catalog is installed for the language.
    """
    global _translator

    language_code = language_code or 'en'

    try:
        _translator = gettext.translation(_domain, localedir=_get_locale_dir(), languages=[language_code])
    except OSError:
        _translator = gettext.NullTranslations()


def _(text: str) -> str:
    """Return translated string for the active language."""
    if _translator:
        return _translator.gettext(text)
    return text


def get_locale_display_name(locale_code: str) -> str:
    """
    Get the English display name for a locale code (e.g. 'de' -> 'German').
    Returns the upper-cased code if Babel does not recognise it.
    """
    try:
        locale = Locale.parse(locale_code.replace('-', '_'))
    except (ValueError, TypeError, UnknownLocaleError):
        return locale_code.upper()

    return locale.get_display_name('en') or locale_code.upper()
