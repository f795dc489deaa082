from __future__ import annotations

import logging
import typing as T

from . import config, constants


LOG = logging.getLogger(__name__)


def _flag(value: bool | None) -> str | None:
    if value is None:
        return None
    return "YES" if value else "NO"


def configure_profile(
    profile: str = constants.DEFAULT_PROFILE,
    exiftool_path: str | None = None,
    stay_open: bool | None = None,
    reopen_after_close: bool | None = None,
    overwrite_original: bool | None = None,
    config_path: str | None = None,
) -> None:
    items: dict[str, str | None] = {
        "exiftool_path": exiftool_path,
        "stay_open": _flag(stay_open),
        "reopen_after_close": _flag(reopen_after_close),
        "overwrite_original": _flag(overwrite_original),
    }
    profile_items = {key: val for key, val in items.items() if val is not None}

    config.update_config(
        profile,
        T.cast(config.ProfileItem, profile_items),
        config_path=config_path,
    )
    LOG.info(
        "Saved profile %s to %s", profile, config_path or constants.CONFIG_PATH
    )
