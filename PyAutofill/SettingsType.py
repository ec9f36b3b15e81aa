from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

BasicType: TypeAlias = str | int | float | bool | list[str] | None
SettingType: TypeAlias = BasicType | dict[str, 'SettingType']

class SettingsType(dict[str, SettingType]):
    """
    Settings for the autofill run and its providers.

    Values are limited to simple types, read back through type-safe getters
    that raise SettingsError when a value cannot be coerced. `None` values are
    dropped on update, so an unset command line option never hides an
    environment default.
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        if not isinstance(settings, SettingsType):
            settings = dict(settings or {})
        super().__init__(settings)

    def get_bool(self, key : str, default : bool|None = False) -> bool:
        from .Helpers.Settings import GetBoolSetting
        return GetBoolSetting(self, key, default)

    def get_int(self, key : str, default : int|None = None) -> int|None:
        from .Helpers.Settings import GetIntSetting
        return GetIntSetting(self, key, default)

    def get_str(self, key : str, default : str|None = None) -> str|None:
        from .Helpers.Settings import GetStrSetting
        return GetStrSetting(self, key, default)

    def get_str_list(self, key : str, default : list[str]|None = None) -> list[str]:
        """ A list of strings, splitting comma or semicolon separated text """
        from .Helpers.Settings import GetStringListSetting
        return GetStringListSetting(self, key, default or [])

    def update(self, other=(), /, **kwds) -> None:
        """ Update settings, ignoring None values """
        if isinstance(other, Mapping):
            other = { k: v for k, v in other.items() if v is not None }
        super().update(other, **{ k: v for k, v in kwds.items() if v is not None })
