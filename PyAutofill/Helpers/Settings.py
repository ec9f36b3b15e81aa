"""
Type-safe readers for settings loaded from the environment, .env files and the command line.

Environment values arrive as strings, so each reader accepts the string form
of its type as well as the type itself. A value that cannot be coerced raises
SettingsError rather than being silently replaced by a default.
"""
from collections.abc import Mapping
from typing import Any

import regex

_true_values = ('true', 'yes', '1')
_false_values = ('false', 'no', '0')

_list_separator = regex.compile(r'[;,]')

class SettingsError(Exception):
    """Raised when a setting cannot be coerced to the expected type."""
    pass

def GetBoolSetting(settings : Mapping[str, Any], key : str, default : bool|None = False) -> bool:
    """
    Read a boolean, accepting 'true'/'false', 'yes'/'no' and '1'/'0' (any case)

    Raises:
        SettingsError: If the value is not recognisable as a boolean
    """
    value = settings.get(key, default)
    if value is None:
        return False

    if isinstance(value, bool):
        return value

    if isinstance(value, str):
        if value.strip().lower() in _true_values:
            return True
        if value.strip().lower() in _false_values:
            return False

    raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to bool")

def GetIntSetting(settings : Mapping[str, Any], key : str, default : int|None = 0) -> int|None:
    """
    Read an integer. Booleans are rejected even though Python treats them as ints.

    Raises:
        SettingsError: If the value cannot be converted
    """
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, bool):
        raise SettingsError(f"Cannot convert setting '{key}' of type bool to int")

    if isinstance(value, (int, float)):
        return int(value)

    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass

    raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} with value {repr(value)} to int")

def GetStrSetting(settings : Mapping[str, Any], key : str, default : str|None = None) -> str|None:
    value = settings.get(key, default)
    if value is None:
        return None

    if isinstance(value, list):
        return ', '.join(str(item) for item in value)

    return value if isinstance(value, str) else str(value)

def GetListSetting(settings : Mapping[str, Any], key : str, default : list[Any]|None = None) -> list[Any]:
    """
    Read a list. Strings such as 'de, fr; it' are split on commas and semicolons.

    Raises:
        SettingsError: If the value is not a sequence or a string
    """
    value = settings.get(key, default)
    if value is None:
        return []

    if isinstance(value, list):
        return value

    if isinstance(value, (tuple, set)):
        return list(value)

    if isinstance(value, str):
        return [ item.strip() for item in _list_separator.split(value) if item.strip() ]

    raise SettingsError(f"Cannot convert setting '{key}' of type {type(value).__name__} to list")

def GetStringListSetting(settings : Mapping[str, Any], key : str, default : list[str]|None = None) -> list[str]:
    values = GetListSetting(settings, key, default or [])
    return [ item if isinstance(item, str) else str(item).strip() for item in values if item is not None ]
