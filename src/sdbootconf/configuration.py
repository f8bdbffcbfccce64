#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import json
import jsonschema
import logging
import os
import pathlib
import typing

import sdbootconf.error

_log = logging.getLogger(__name__)

_log_debug = _log.debug


class Configuration(object):
    """sdbootconf configuration."""

    _schema = {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "efi_mount": {
                "type": "string",
                "minLength": 1
            },
            "cmdline": {
                "type": "string",
                "minLength": 1
            }
        }
    }

    _defaults = {
        "efi_mount": "/boot/efi",
        "cmdline": "/proc/cmdline"
    }

    def __init__(self) -> None:
        # Load the configuration file from the first (most important)
        # configuration directory.  Fall back on /etc/xdg if no directory is
        # defined.  See also https://specifications.freedesktop.org/
        # basedir-spec/basedir-spec-latest.html.
        xdg_config_dirs = os.getenv("XDG_CONFIG_DIRS")
        xdg_config_dir = xdg_config_dirs.split(":")[0] \
            if xdg_config_dirs else "/etc/xdg"
        self.path = pathlib.Path(
            xdg_config_dir) / "sdbootconf" / "sdbootconf.conf"

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                self._instance = json.load(f)
        except FileNotFoundError:
            _log_debug("Configuration file %s not found, using defaults",
                       self.path)
            self._instance = {}
        except ValueError as e:
            raise sdbootconf.error.InitializationError(
                f"Configuration file {self.path} is not valid JSON: {e}")
        except OSError as e:
            raise sdbootconf.error.InitializationError(
                f"Failed to read configuration file {self.path}: "
                f"{e.strerror}")

        # Validate the configuration file using JSON Schema.
        try:
            jsonschema.validate(self._instance, Configuration._schema)
        except jsonschema.exceptions.ValidationError as e:
            raise sdbootconf.error.InitializationError(
                f"Invalid configuration: {e.message}")

        for name, value in Configuration._defaults.items():
            self._instance.setdefault(name, value)

    def __getattr__(self, name: str) -> typing.Any:
        # Only called for names which are not regular attributes.
        try:
            return self.__dict__["_instance"][name]
        except KeyError:
            raise AttributeError(name)
