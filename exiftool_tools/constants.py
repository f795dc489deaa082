from __future__ import annotations

import os

import appdirs

_ENV_PREFIX = "EXIFTOOL_TOOLS_"


def _yes_or_no(val: str) -> bool:
    return val.strip().upper() in ["1", "TRUE", "YES"]


###################
##### GENERAL #####
###################
USER_CONFIG_DIR = appdirs.user_config_dir(appname="exiftool_tools")
CONFIG_PATH: str = os.getenv(
    _ENV_PREFIX + "CONFIG_PATH", os.path.join(USER_CONFIG_DIR, "config.ini")
)
DEFAULT_PROFILE: str = os.getenv(_ENV_PREFIX + "PROFILE", "default")


####################
##### EXIFTOOL #####
####################
EXIFTOOL_PATH: str = os.getenv(_ENV_PREFIX + "EXIFTOOL_PATH", "exiftool")
# Keep one exiftool process running (-stay_open) and reuse it for all commands
STAY_OPEN: bool = _yes_or_no(os.getenv(_ENV_PREFIX + "STAY_OPEN", "NO"))
# Whether a closed ExifTool instance may be used again
REOPEN_AFTER_CLOSE: bool = _yes_or_no(
    os.getenv(_ENV_PREFIX + "REOPEN_AFTER_CLOSE", "NO")
)
# Pass -overwrite_original when writing, so no "<file>_original" backup is left
OVERWRITE_ORIGINAL: bool = _yes_or_no(
    os.getenv(_ENV_PREFIX + "OVERWRITE_ORIGINAL", "NO")
)
# In seconds, how long to wait for a stay-open process to exit before killing it
STOP_TIMEOUT: float = float(os.getenv(_ENV_PREFIX + "STOP_TIMEOUT", 5))
# -stay_open was added in exiftool 8.36
STAY_OPEN_MIN_VERSION = "8.36"
