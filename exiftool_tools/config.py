from __future__ import annotations

import configparser
import os
import typing as T
from typing import TypedDict

import jsonschema

from . import constants, exceptions


class ProfileItem(TypedDict, total=False):
    exiftool_path: str
    # Flags are stored as YES/NO strings
    stay_open: str
    reopen_after_close: str
    overwrite_original: str


_FLAG_SCHEMA = {
    "type": "string",
    "pattern": "^(?i:yes|no|true|false|1|0)$",
}


ProfileItemSchema = {
    "type": "object",
    "properties": {
        "exiftool_path": {"type": "string", "minLength": 1},
        "stay_open": _FLAG_SCHEMA,
        "reopen_after_close": _FLAG_SCHEMA,
        "overwrite_original": _FLAG_SCHEMA,
    },
    "additionalProperties": False,
}


ProfileItemSchemaValidator = jsonschema.Draft202012Validator(ProfileItemSchema)


def validate_profile(profile_name: str, items: T.Mapping[str, str]) -> ProfileItem:
    try:
        ProfileItemSchemaValidator.validate(dict(items))
    except jsonschema.ValidationError as ex:
        raise exceptions.InvalidArgumentError(
            f"Invalid profile {profile_name}: {ex.message}", value=dict(items)
        ) from ex
    return T.cast(ProfileItem, dict(items))


def _load_config(config_path: str) -> configparser.ConfigParser:
    config = configparser.ConfigParser()
    # Override to not change option names (by default it will lower them)
    config.optionxform = str  # type: ignore
    # If path not found, then config will be empty
    config.read(config_path)
    return config


def _write_config(config: configparser.ConfigParser, config_path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
    with open(config_path, "w") as fp:
        config.write(fp)


def load_profile(
    profile_name: str, config_path: str | None = None
) -> ProfileItem | None:
    if config_path is None:
        config_path = constants.CONFIG_PATH
    config = _load_config(config_path)
    if not config.has_section(profile_name):
        return None
    return validate_profile(profile_name, dict(config.items(profile_name)))


def list_all_profiles(config_path: str | None = None) -> dict[str, ProfileItem]:
    if config_path is None:
        config_path = constants.CONFIG_PATH
    cp = _load_config(config_path)
    profiles = {
        profile_name: load_profile(profile_name, config_path=config_path)
        for profile_name in cp.sections()
    }
    return {name: item for name, item in profiles.items() if item is not None}


def update_config(
    profile_name: str, items: ProfileItem, config_path: str | None = None
) -> None:
    if config_path is None:
        config_path = constants.CONFIG_PATH
    validate_profile(profile_name, T.cast(T.Mapping[str, str], items))
    config = _load_config(config_path)
    if not config.has_section(profile_name):
        config.add_section(profile_name)
    for key, val in items.items():
        config.set(profile_name, key, T.cast(str, val))
    _write_config(config, config_path)


def remove_config(profile_name: str, config_path: str | None = None) -> None:
    if config_path is None:
        config_path = constants.CONFIG_PATH

    config = _load_config(config_path)
    if not config.has_section(profile_name):
        return

    config.remove_section(profile_name)
    _write_config(config, config_path)
