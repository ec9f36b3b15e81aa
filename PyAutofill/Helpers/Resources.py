import os
import sys
import appdirs # type: ignore

config_dir : str = appdirs.user_config_dir("DeepLAutofill", "DeepLAutofill", roaming=True)

def GetResourcePath(relative_path : str, *parts : str) -> str:
    """
    Locate a resource file or folder in the application directory or the PyInstaller bundle.
    """
    if hasattr(sys, "_MEIPASS"):
        return os.path.join(sys._MEIPASS, relative_path, *parts) # type: ignore

    package_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(package_root, relative_path or "", *parts)
