from __future__ import annotations
from collections.abc import Mapping
from copy import deepcopy
import os
import dotenv

from PyAutofill.SettingsType import SettingType, SettingsType
from PyAutofill.version import __version__

MAX_BATCH_SIZE = 50

# Load environment variables from .env file
dotenv.load_dotenv()

def env_bool(key : str, default : bool = False) -> bool:
    var = os.getenv(key, default)
    return True if var and str(var).lower() in ('true', 'yes', '1') else False

def env_int(key : str, default : int|None = None) -> int|None:
    value = os.getenv(key, default)
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return int(value)

def env_str(key : str, default : str|None = None) -> str|None:
    value = os.getenv(key, default)
    return str(value) if value is not None else None

default_settings = {
    'version': __version__,
    'provider': env_str('AUTOFILL_PROVIDER', 'DeepL'),
    'api_key': env_str('DEEPL_API_KEY', None),
    'server_url': env_str('DEEPL_SERVER_URL', None),
    'path': env_str('AUTOFILL_PATH', 'translations/'),
    'source_locale': env_str('AUTOFILL_SOURCE_LOCALE', 'en'),
    'target_locales': [],
    'format': env_str('AUTOFILL_FORMAT', 'xliff'),
    'domain': env_str('AUTOFILL_DOMAIN', 'messages'),
    'batch_size': env_int('AUTOFILL_BATCH_SIZE', MAX_BATCH_SIZE),
    'mark_auto_translated': env_bool('AUTOFILL_MARK_AUTO_TRANSLATED', True),
    'dry_run': False,
    'force': False,
    'verbose': False,
    'ui_language': env_str('AUTOFILL_UI_LANGUAGE', 'en'),
}

class Options(SettingsType):
    def __init__(self, settings : SettingsType|Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        """ Initialise the Options object with default options and any provided options. """
        super().__init__()

        self.update(deepcopy(default_settings))

        settings = SettingsType(settings)

        if settings:
            # Remove None values from options and merge with defaults
            filtered_settings = {k: deepcopy(v) for k, v in settings.items() if v is not None}
            self.update(filtered_settings)

        self.update(kwargs)

    @property
    def version(self) -> str:
        return self.get_str('version') or ''

    @property
    def provider(self) -> str:
        """ the name of the translation provider """
        return self.get_str('provider') or ''

    @property
    def api_key(self) -> str|None:
        return self.get_str('api_key') or None

    @property
    def path(self) -> str:
        return self.get_str('path') or str(default_settings['path'])

    @property
    def source_locale(self) -> str:
        return self.get_str('source_locale') or 'en'

    @property
    def target_locales(self) -> list[str]:
        """ requested target locales in order, without duplicates """
        locales = [ locale.strip() for locale in self.get_str_list('target_locales') if locale.strip() ]
        return list(dict.fromkeys(locales))

    @property
    def format(self) -> str:
        return (self.get_str('format') or 'xliff').lower()

    @property
    def domain(self) -> str:
        return self.get_str('domain') or 'messages'

    @property
    def batch_size(self) -> int:
        batch_size = self.get_int('batch_size') or MAX_BATCH_SIZE
        return max(1, min(batch_size, MAX_BATCH_SIZE))

    @property
    def mark_auto_translated(self) -> bool:
        return self.get_bool('mark_auto_translated', True)

    @property
    def dry_run(self) -> bool:
        return self.get_bool('dry_run')

    @property
    def force(self) -> bool:
        return self.get_bool('force')

    @property
    def verbose(self) -> bool:
        return self.get_bool('verbose')

    @property
    def ui_language(self) -> str:
        """ language for messages shown to the user """
        return self.get_str('ui_language') or 'en'

    def GetSettings(self) -> SettingsType:
        """
        Get a copy of the settings dictionary with only the default keys included
        """
        return SettingsType({ key: deepcopy(self.get(key)) for key in self.keys() & default_settings.keys() })
