#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import argh
import pathlib
import sys
import syslog
import typing

import sdbootconf
import sdbootconf.cmdline
import sdbootconf.configuration
import sdbootconf.error
import sdbootconf.loader


class Client(object):
    """sdbootconf command line client."""

    def __init__(self) -> None:
        # Load the configuration.  Raises InitializationError on error.
        self._configuration = sdbootconf.configuration.Configuration()

        sdbootconf.cmdline.set_default(sdbootconf.cmdline.KernelCmdline(
            pathlib.Path(self._configuration.cmdline)))

        # Load the loader configuration and all entries.  Raises an Error
        # subclass if any of the files is invalid.
        self._manager = sdbootconf.SystemdBootConf(
            pathlib.Path(self._configuration.efi_mount))

    def list(self) -> None:
        """Lists the loader configuration and all boot loader entries."""
        loader_conf = self._manager.loader_conf
        current = self._manager.current_entry()

        print("loader:")
        print(f"  default: {_format(loader_conf.default)}")
        print(f"  timeout: {_format(loader_conf.timeout)}")

        for entry in self._manager.entries:
            marker = " (current)" if entry is current else ""
            print(f"  entry: {entry.id}{marker}")
            print(f"    title: {entry.title}")
            print(f"    linux: {entry.linux}")
            print(f"    initrd: {_format(entry.initrd)}")
            print(f"    options: {' '.join(entry.options)}")

    def show(self, id: str) -> None:
        """
        Prints a boot loader entry in entry file format.

        Keyword arguments:
        id -- the entry id
        """
        entry = self._manager.get(id)

        if entry is None:
            raise sdbootconf.error.NotFoundError(id)

        print(entry.dump(), end="")

    @argh.arg("-s", "--seconds", type=int)
    def timeout(self, *, seconds: int = None) -> None:
        """
        Prints or sets the boot menu timeout.

        Keyword arguments:
        seconds -- the new timeout in seconds
        """
        if seconds is None:
            print(_format(self._manager.loader_conf.timeout))
            return

        self._manager.loader_conf.timeout = \
            sdbootconf.loader.validate_timeout(seconds)
        self._overwrite_loader_conf(f"Set boot menu timeout to {seconds}")

    @argh.arg("-e", "--entry")
    def default(self, *, entry: str = None) -> None:
        """
        Prints or sets the default boot loader entry.

        Keyword arguments:
        entry -- the id of the new default entry
        """
        if entry is None:
            print(_format(self._manager.loader_conf.default))
            return

        if not self._manager.entry_exists(entry):
            raise sdbootconf.error.NotFoundError(entry)

        self._manager.loader_conf.default = entry
        self._overwrite_loader_conf(f"Set default entry to {entry}")

    def current(self) -> None:
        """Prints the id of the entry the system was booted from."""
        entry = self._manager.current_entry()

        if entry is None:
            print("Current entry not found.")
            sys.exit(-1)

        print(entry.id)

    def check(self) -> None:
        """Checks whether the default entry exists."""
        state = self._manager.default_entry_exists()
        print(f"Default entry {state.value}.")

        if sdbootconf.DefaultState.DOES_NOT_EXIST == state:
            sys.exit(-1)

    def _overwrite_loader_conf(self, message: str) -> None:
        self._manager.overwrite_loader_conf()
        syslog.syslog(syslog.LOG_INFO, message)

        # Read the file back so that the printed state is what is on disk.
        self._manager.load_conf()
        print(f"{message}.")


def _format(value: typing.Any) -> str:
    return "not set" if value is None else str(value)


def main(args: typing.List[str] = None) -> None:
    """Entry point."""
    if args is None:
        args = sys.argv[1:]

    syslog.openlog("sdbootconf")

    try:
        # Initialize the sdbootconf client.
        client = Client()

        # Process command line arguments.
        parser = argh.ArghParser(prog="sdbootconf")
        parser.add_commands([
            client.list, client.show, client.timeout, client.default,
            client.current, client.check])
        parser.dispatch(args)
    except sdbootconf.error.InitializationError as e:
        print(f"Failed to start sdbootconf: {e.message}.")
        sys.exit(-1)
    except sdbootconf.error.Error as e:
        syslog.syslog(syslog.LOG_ERR, str(e))
        print(f"Failed to access systemd-boot configuration: {e}.")
        sys.exit(-1)
    except sdbootconf.error.LoaderError as e:
        print(f"Invalid loader configuration value: {e}.")
        sys.exit(-1)


if __name__ == "__main__":
    main()
