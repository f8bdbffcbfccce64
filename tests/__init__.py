#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import logging
import pathlib
import shutil
import tempfile
import typing

log = logging.getLogger()
log.setLevel(logging.DEBUG)
formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
console_handler = logging.StreamHandler()
console_handler.setFormatter(formatter)
log.addHandler(console_handler)

POP_OS_ENTRY = """title Pop!_OS
linux /EFI/Pop_OS-f3b1c6b2/vmlinuz.efi
initrd /EFI/Pop_OS-f3b1c6b2/initrd.img
options root=UUID=f3b1c6b2 ro quiet loglevel=0 splash
"""

POP_OS_OLDKERN_ENTRY = """title Pop!_OS
linux /EFI/Pop_OS-f3b1c6b2/vmlinuz-previous.efi
initrd /EFI/Pop_OS-f3b1c6b2/initrd.img-previous
options root=UUID=f3b1c6b2 ro quiet loglevel=0 splash
"""

RECOVERY_ENTRY = """title Pop!_OS recovery
linux /EFI/Recovery-4c5e/vmlinuz.efi
initrd /EFI/Recovery-4c5e/initrd.gz
options boot=casper hostname=recovery userfullname=Recovery noprompt
"""


# Test sandbox functions

def mk_sandbox() -> pathlib.Path:
    """Creates a new temporary sandbox directory."""
    return pathlib.Path(tempfile.mkdtemp(prefix="sdbootconf-"))


def rm_sandbox(sandbox: pathlib.Path) -> None:
    """Removes a sandbox created by mk_sandbox()."""
    shutil.rmtree(sandbox, ignore_errors=True)


def write_file(path: pathlib.Path, content: typing.Union[str, bytes]) -> None:
    """Writes content to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")


def mk_efi_mount(
        sandbox: pathlib.Path, loader: str = None,
        entries: typing.Mapping[str, str] = None) -> pathlib.Path:
    """
    Creates an EFI system partition layout below sandbox.

    Keyword arguments:
    loader  -- contents of loader.conf or None to leave it out
    entries -- a file name: contents mapping for loader/entries
    """
    efi_mount = sandbox / "efi"
    (efi_mount / "loader" / "entries").mkdir(parents=True)

    if loader is not None:
        write_file(efi_mount / "loader" / "loader.conf", loader)

    for name, content in (entries or {}).items():
        write_file(efi_mount / "loader" / "entries" / name, content)

    return efi_mount
