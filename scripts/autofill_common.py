import os
import logging

from argparse import ArgumentParser, Namespace
from collections.abc import Callable
from dataclasses import dataclass

from PyAutofill.AutofillError import AutofillError
from PyAutofill.AutofillPipeline import AutofillPipeline, AutofillResult
from PyAutofill.Helpers.Localization import _, initialize_localization
from PyAutofill.Helpers.Resources import config_dir
from PyAutofill.Options import Options
from PyAutofill.TranslationClient import TranslationClient

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(config_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    # Create console logger
    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    # Create file handler with the same logging level
    try:
        os.makedirs(config_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)

    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the command line parser for the autofill tool
    """
    parser = ArgumentParser(description=description)
    parser.add_argument('path', nargs='?', default=None, help="Path to translation file or directory (default: translations/)")
    parser.add_argument('-s', '--source-locale', dest='source_locale', type=str, default=None, help="Source locale (default: en)")
    parser.add_argument('-t', '--target-locales', dest='target_locales', action='append', type=str, default=None, help="Target locales (can be used multiple times)")
    parser.add_argument('-k', '--api-key', dest='api_key', type=str, default=None, help="DeepL API key (or use DEEPL_API_KEY env variable)")
    parser.add_argument('-f', '--format', type=str, default=None, help="Translation file format: xliff, yaml, json, php (default: xliff)")
    parser.add_argument('--domain', type=str, default=None, help="Translation domain (default: messages)")
    parser.add_argument('-d', '--dry-run', dest='dry_run', action='store_true', help="Simulate without writing files")
    parser.add_argument('--force', action='store_true', help="Overwrite files without confirmation")
    parser.add_argument('--no-mark-auto-translated', dest='no_mark_auto_translated', action='store_true', help="Do not mark translations with XLIFF state (needs-review-translation)")
    parser.add_argument('-v', '--verbose', action='store_true', help="Show each translated key")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser

def ParseLocales(values : list[str]|None) -> list[str]:
    """ Target locales from repeated options, also accepting comma separated lists """
    locales = []
    for value in values or []:
        locales.extend(locale.strip() for locale in value.split(',') if locale.strip())
    return locales

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the command line, with environment defaults for anything not given """
    options = {
        'path': args.path,
        'source_locale': args.source_locale,
        'target_locales': ParseLocales(args.target_locales),
        'api_key': args.api_key,
        'format': args.format,
        'domain': args.domain,
        'dry_run': args.dry_run,
        'force': args.force,
        'mark_auto_translated': False if args.no_mark_auto_translated else None,
        'verbose': args.verbose,
    }

    # Adding optional new keys from kwargs
    for key, value in kwargs.items():
        options[key] = value

    return Options(options)

def ConfirmOverwrite() -> bool:
    """ Ask before modifying translation files. An empty answer means yes. """
    try:
        answer = input(_("Translation files will be modified. Continue? (Y/n) "))

    except EOFError:
        return False

    return not answer.strip().lower().startswith('n')

def RunAutofill(args : Namespace, confirm : Callable[[], bool]|None = ConfirmOverwrite, client : TranslationClient|None = None, **kwargs) -> int:
    """
    Run the autofill pipeline for parsed command line arguments and return the exit status.
    The translation client is created from the provider settings unless one is supplied.
    """
    try:
        options : Options = CreateOptions(args, **kwargs)
        initialize_localization(options.ui_language)

        pipeline = AutofillPipeline(options, client=client, confirm=confirm)
        result : AutofillResult = pipeline.Run()
        logging.debug(f"Autofill finished with status {result.status.value}")
        return EXIT_SUCCESS

    except AutofillError as e:
        logging.error(_("Error: {}").format(str(e)))
        return EXIT_FAILURE
