#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import copy
import logging
import os
import pathlib
import typing

import sdbootconf.cmdline
import sdbootconf.error

_log = logging.getLogger(__name__)

_log_debug = _log.debug


class Entry(object):
    """systemd-boot boot loader entry."""

    def __init__(
            self, id: str, title: str = "", linux: str = "",
            initrd: str = None, options: typing.Iterable[str] = None) -> None:
        self._id = id
        self.title = title
        self.linux = linux
        self.initrd = initrd
        self.options = list(options) if options else []

    @property
    def id(self) -> str:
        """The entry identifier, derived from the file name."""
        return self._id

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented

        return (self.id, self.title, self.linux, self.initrd, self.options) \
            == (other.id, other.title, other.linux, other.initrd,
                other.options)

    def __repr__(self) -> str:
        return (
            f"Entry(id={self.id!r}, title={self.title!r}, "
            f"linux={self.linux!r}, initrd={self.initrd!r}, "
            f"options={self.options!r})")

    @classmethod
    def from_path(cls, path: os.PathLike) -> "Entry":
        """
        Parses a boot loader entry file.  Unknown keys are ignored.

        Keyword arguments:
        path -- the entry file; its name without suffix becomes the entry id

        Raises an EntryError subclass if the file could not be read or if
        required fields are missing.
        """
        path = pathlib.Path(path)

        if not path.is_file():
            raise sdbootconf.error.EntryNotAFileError()

        id = path.stem

        if not id:
            raise sdbootconf.error.NoFilenameError()

        # Undecodable bytes in file names are mapped to lone surrogates,
        # which cannot be encoded again.
        try:
            id.encode("utf-8")
        except UnicodeEncodeError:
            raise sdbootconf.error.Utf8FilenameError()

        try:
            f = open(path, "r", encoding="utf-8", newline="\n")
        except OSError as e:
            raise sdbootconf.error.EntryOpenError(e) from e

        entry = cls(id)

        with f:
            try:
                for line in f:
                    entry._parse_line(line)
            except (OSError, UnicodeDecodeError) as e:
                raise sdbootconf.error.EntryLineError(e) from e

        if not entry.title:
            raise sdbootconf.error.MissingTitleError()

        if not entry.linux:
            raise sdbootconf.error.MissingLinuxError()

        _log_debug("Loaded entry %s from %s", entry.id, path)
        return entry

    def _parse_line(self, line: str) -> None:
        fields = line.split()

        if not fields:
            return

        key, values = fields[0], fields[1:]

        if "title" == key:
            self.title = " ".join(values)
        elif "linux" == key:
            if not values:
                raise sdbootconf.error.NoValueForLinuxError()

            self.linux = values[0]
        elif "initrd" == key:
            if not values:
                raise sdbootconf.error.NoValueForInitrdError()

            self.initrd = values[0]
        elif "options" == key:
            self.options = values

    def copy(self) -> "Entry":
        """Returns a working copy of this entry."""
        return copy.deepcopy(self)

    def dump(self) -> str:
        """Returns the contents of the entry file for this entry."""
        buffer = [f"title {self.title}", f"linux {self.linux}"]

        if self.initrd:
            buffer.append(f"initrd {self.initrd}")

        # The colon is part of the written format.
        if self.options:
            buffer.append(f"options: {' '.join(self.options)}")

        return "".join(f"{line}\n" for line in buffer)

    def expected_cmdline(self) -> typing.List[str]:
        """
        Returns the command line tokens systemd-boot passes to the kernel
        when booting this entry.
        """
        expected = []

        if self.initrd:
            initrd = self.initrd.replace("/", "\\")
            expected.append(f"initrd={initrd}")

        return expected + self.options

    def is_current(
            self, cmdline: typing.Union[
                sdbootconf.cmdline.KernelCmdline,
                typing.Sequence[str]] = None) -> bool:
        """
        Determines if this entry is the entry the system was booted from by
        matching its initrd and options against the kernel command line.

        Both sequences are compared position by position from their first
        token up to the length of the shorter one, so kernel parameters
        preceding the initrd prevent a match.

        Keyword arguments:
        cmdline -- the command line or its tokens (default: the process-wide
                   kernel command line)
        """
        if cmdline is None:
            tokens = sdbootconf.cmdline.kernel_cmdline()
        elif isinstance(cmdline, sdbootconf.cmdline.KernelCmdline):
            tokens = cmdline.tokens()
        else:
            tokens = cmdline

        return all(
            live == expected for live, expected in zip(
                tokens, self.expected_cmdline()))
