"""Entry point functions for the deepl-autofill command line tool."""

import os
import sys

# Add the parent directory to the sys path so that modules can be found
base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(base_path)


def deepl_autofill():
    """Entry point for deepl-autofill command."""
    from scripts.autofill_common import InitLogger, CreateArgParser, RunAutofill

    parser = CreateArgParser("Auto-fill missing translations using DeepL API")
    args = parser.parse_args()

    logger_options = InitLogger("deepl-autofill", args.debug)

    sys.exit(RunAutofill(args))
