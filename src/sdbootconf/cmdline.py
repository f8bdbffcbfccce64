#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import logging
import pathlib
import threading
import typing

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_warn = _log.warning


class KernelCmdline(object):
    """
    Command line the running kernel was started with, split into tokens.

    The source is read at most once.  Every caller observes the same tuple
    afterwards, regardless of the thread it is reading from.
    """

    def __init__(
            self,
            path: pathlib.Path = pathlib.Path("/proc/cmdline")) -> None:
        self._path = pathlib.Path(path)
        self._lock = threading.Lock()
        self._tokens = None

    @classmethod
    def from_string(cls, text: str) -> "KernelCmdline":
        """
        Returns an already initialized instance holding the tokens of text.

        Keyword arguments:
        text -- the raw command line
        """
        cmdline = cls()
        cmdline._tokens = tuple(text.split())
        return cmdline

    @property
    def path(self) -> pathlib.Path:
        return self._path

    def tokens(self) -> typing.Tuple[str, ...]:
        """Returns the command line tokens, reading the source on first use."""
        if self._tokens is None:
            with self._lock:
                if self._tokens is None:
                    self._tokens = tuple(self._read().split())

        return self._tokens

    def _read(self) -> str:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            _log_debug("Kernel command line %s not found", self._path)
        except (OSError, UnicodeDecodeError) as e:
            _log_warn("Failed to read kernel command line %s: %s",
                      self._path, e)

        return ""


_default = KernelCmdline()
_default_lock = threading.Lock()


def get_default() -> KernelCmdline:
    """Returns the process-wide command line instance."""
    with _default_lock:
        return _default


def set_default(cmdline: KernelCmdline) -> None:
    """
    Replaces the process-wide command line instance.

    Keyword arguments:
    cmdline -- the new instance
    """
    global _default

    with _default_lock:
        _default = cmdline


def kernel_cmdline() -> typing.Tuple[str, ...]:
    """Returns the tokens of the process-wide command line instance."""
    return get_default().tokens()
