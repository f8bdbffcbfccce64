#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import logging
import os
import pathlib
import re

import sdbootconf.error

_log = logging.getLogger(__name__)

_log_debug = _log.debug

# Timeouts are unsigned 32-bit integers.
_TIMEOUT_MAX = 0xFFFFFFFF


class LoaderConf(object):
    """systemd-boot loader configuration."""

    def __init__(self, default: str = None, timeout: int = None) -> None:
        self.default = default
        self.timeout = timeout

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoaderConf):
            return NotImplemented

        return (self.default, self.timeout) == (other.default, other.timeout)

    def __repr__(self) -> str:
        return f"LoaderConf(default={self.default!r}, timeout={self.timeout!r})"

    @classmethod
    def from_path(cls, path: os.PathLike) -> "LoaderConf":
        """
        Parses the loader configuration.  A missing file results in an empty
        configuration.

        Keyword arguments:
        path -- the loader.conf file
        """
        path = pathlib.Path(path)
        loader = cls()

        if not path.exists():
            _log_debug("Loader conf %s does not exist", path)
            return loader

        if not path.is_file():
            raise sdbootconf.error.LoaderNotAFileError()

        try:
            f = open(path, "r", encoding="utf-8", newline="\n")
        except OSError as e:
            raise sdbootconf.error.LoaderOpenError(e) from e

        with f:
            try:
                for line in f:
                    loader._parse_line(line)
            except (OSError, UnicodeDecodeError) as e:
                raise sdbootconf.error.LoaderLineError(e) from e

        return loader

    def _parse_line(self, line: str) -> None:
        fields = line.split()

        if not fields:
            return
        elif "default" == fields[0]:
            if len(fields) < 2:
                raise sdbootconf.error.NoValueForDefaultError()

            self.default = fields[1]
        elif "timeout" == fields[0]:
            if len(fields) < 2:
                raise sdbootconf.error.NoValueForTimeoutError()

            self.timeout = _parse_timeout(fields[1])

    def dump(self) -> str:
        """Returns the contents of loader.conf for this configuration."""
        buffer = []

        if self.default is not None:
            buffer.append(f"default {self.default}\n")

        if self.timeout is not None:
            buffer.append(f"timeout {self.timeout}\n")

        return "".join(buffer)


def validate_timeout(timeout: int) -> int:
    """
    Checks that timeout can be stored in loader.conf and read back.

    Keyword arguments:
    timeout -- the timeout in seconds
    """
    if timeout < 0 or timeout > _TIMEOUT_MAX:
        raise sdbootconf.error.TimeoutNaNError(str(timeout))

    return timeout


def _parse_timeout(value: str) -> int:
    if not re.fullmatch(r"\+?[0-9]+", value) or int(value) > _TIMEOUT_MAX:
        raise sdbootconf.error.TimeoutNaNError(value)

    return int(value)
