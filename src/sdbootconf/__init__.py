#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import enum
import logging
import os
import pathlib
import typing

import sdbootconf.cmdline
import sdbootconf.entry
import sdbootconf.error
import sdbootconf.loader

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info


class DefaultState(enum.Enum):
    """State of the default entry named by the loader configuration."""

    NOT_DEFINED = "not defined"
    EXISTS = "exists"
    DOES_NOT_EXIST = "does not exist"


class SystemdBootConf(object):
    """systemd-boot configuration below an EFI system partition."""

    def __init__(self, efi_mount: pathlib.Path) -> None:
        self.efi_mount = pathlib.Path(efi_mount)
        self.entries_path = self.efi_mount / "loader" / "entries"
        self.loader_path = self.efi_mount / "loader" / "loader.conf"
        self.entries = []
        self.loader_conf = sdbootconf.loader.LoaderConf()

        self.load_conf()
        self.load_entries()

    def load_entries(self) -> None:
        """
        Loads all entries from the entries directory.  Only regular files
        with a .conf suffix are considered.  A single invalid entry aborts the
        whole load.
        """
        try:
            dir_entries = os.scandir(self.entries_path)
        except OSError as e:
            raise sdbootconf.error.EntriesDirError(e) from e

        with dir_entries:
            try:
                candidates = [
                    pathlib.Path(dir_entry.path) for dir_entry in dir_entries
                    if dir_entry.is_file() and dir_entry.name.endswith(
                        ".conf")]
            except OSError as e:
                raise sdbootconf.error.FileEntryError(e) from e

        entries = []

        for path in sorted(candidates):
            try:
                entries.append(sdbootconf.entry.Entry.from_path(path))
            except sdbootconf.error.EntryError as e:
                raise sdbootconf.error.EntryParseError(path, e) from e

        self.entries = entries
        _log_debug("Loaded %d entries from %s", len(entries), self.entries_path)

    def load_conf(self) -> None:
        """Re-reads the loader configuration."""
        try:
            self.loader_conf = sdbootconf.loader.LoaderConf.from_path(
                self.loader_path)
        except sdbootconf.error.LoaderError as e:
            raise sdbootconf.error.LoaderParseError(self.loader_path, e) \
                from e

    def default_entry_exists(self) -> DefaultState:
        """Checks whether the configured default entry exists."""
        default = self.loader_conf.default

        if default is None:
            return DefaultState.NOT_DEFINED
        elif self.entry_exists(default):
            return DefaultState.EXISTS
        else:
            return DefaultState.DOES_NOT_EXIST

    def entry_exists(self, id: str) -> bool:
        """
        Checks whether an entry with the given id exists.

        Keyword arguments:
        id -- the entry id
        """
        return self.get(id) is not None

    def get(self, id: str) -> typing.Optional[sdbootconf.entry.Entry]:
        """
        Returns the entry with the given id or None.

        Keyword arguments:
        id -- the entry id
        """
        return next((entry for entry in self.entries if entry.id == id), None)

    def current_entry(
            self, cmdline: sdbootconf.cmdline.KernelCmdline = None) -> \
            typing.Optional[sdbootconf.entry.Entry]:
        """
        Returns the first entry matching the kernel command line or None.

        Keyword arguments:
        cmdline -- the kernel command line (default: the process-wide one)
        """
        if cmdline is None:
            cmdline = sdbootconf.cmdline.get_default()

        return next(
            (entry for entry in self.entries if entry.is_current(cmdline)),
            None)

    def overwrite_loader_conf(self) -> None:
        """Overwrites loader.conf with the stored values."""
        try:
            _write(self.loader_path, self.loader_conf.dump())
        except OSError as e:
            raise sdbootconf.error.LoaderWriteError(e) from e

        _log_info("Wrote loader conf %s", self.loader_path)

    def overwrite_entry_conf(self, id: str) -> None:
        """
        Overwrites the entry file of the given entry with the stored values.

        Keyword arguments:
        id -- the entry id
        """
        entry = self.get(id)

        if entry is None:
            raise sdbootconf.error.NotFoundError(id)

        path = self.entries_path / f"{entry.id}.conf"

        try:
            _write(path, entry.dump())
        except OSError as e:
            raise sdbootconf.error.EntryWriteError(e) from e

        _log_info("Wrote entry %s to %s", entry.id, path)


def _write(path: pathlib.Path, text: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
        f.flush()
