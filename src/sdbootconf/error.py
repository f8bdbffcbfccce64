#
# systemd-boot conf
# Copyright 2020, 2021 Thomas Müller
# All rights reserved.
#

import pathlib


class InitializationError(Exception):
    """Initialization error."""

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def __str__(self) -> str:
        return self.message


class _CausedError(Exception):
    """Error which optionally wraps an underlying exception."""

    _message = "Failed"

    def __init__(self, cause: Exception = None) -> None:
        super().__init__()
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self._message

        return f"{self._message}: {self.cause}"


class EntryError(_CausedError):
    """Boot loader entry error."""

    _message = "Invalid entry"


class EntryLineError(EntryError):
    """Error reading a line in an entry file."""

    _message = "Error reading line in entry file"


class MissingLinuxError(EntryError):
    """Entry without a linux field."""

    _message = "linux field is missing"


class MissingTitleError(EntryError):
    """Entry without a title field."""

    _message = "title field is missing"


class EntryNotAFileError(EntryError):
    """Entry path which is not a regular file."""

    _message = "Entry is not a file"


class NoFilenameError(EntryError):
    """Entry path without a file name."""

    _message = "Entry does not have a file name"


class NoValueForInitrdError(EntryError):
    """initrd key without a value."""

    _message = "initrd was defined without a value"


class NoValueForLinuxError(EntryError):
    """linux key without a value."""

    _message = "linux was defined without a value"


class EntryOpenError(EntryError):
    """Error opening an entry file."""

    _message = "Error opening entry file"


class Utf8FilenameError(EntryError):
    """Entry file name which is not valid UTF-8."""

    _message = "Entry has a file name that is not UTF-8"


class LoaderError(_CausedError):
    """Loader configuration error."""

    _message = "Invalid loader configuration"


class LoaderLineError(LoaderError):
    """Error reading a line in the loader configuration."""

    _message = "Error reading line in loader conf"


class LoaderNotAFileError(LoaderError):
    """Loader configuration path which is not a regular file."""

    _message = "Loader conf is not a file"


class NoValueForDefaultError(LoaderError):
    """default key without a value."""

    _message = "default was defined without a value"


class NoValueForTimeoutError(LoaderError):
    """timeout key without a value."""

    _message = "timeout was defined without a value"


class LoaderOpenError(LoaderError):
    """Error opening the loader configuration."""

    _message = "Error opening loader file"


class TimeoutNaNError(LoaderError):
    """timeout key with a value which is not a number."""

    def __init__(self, value: str) -> None:
        super().__init__()
        self.value = value

    def __str__(self) -> str:
        return (
            f"timeout was defined with a value ({self.value}) which is not a "
            f"number")


class Error(_CausedError):
    """systemd-boot configuration error."""


class EntriesDirError(Error):
    """Error reading the loader entries directory."""

    _message = "Error reading loader entries directory"


class EntryParseError(Error):
    """Error parsing an entry file."""

    def __init__(self, path: pathlib.Path, why: EntryError) -> None:
        super().__init__(why)
        self.path = path
        self.why = why

    def __str__(self) -> str:
        return f"Error parsing entry at {self.path}: {self.why}"


class EntryWriteError(Error):
    """Error writing an entry file."""

    _message = "Error writing entry file"


class FileEntryError(Error):
    """Error reading an item in the loader entries directory."""

    _message = "Error reading entry in loader entries directory"


class LoaderParseError(Error):
    """Error parsing the loader configuration."""

    def __init__(self, path: pathlib.Path, why: LoaderError) -> None:
        super().__init__(why)
        self.path = path
        self.why = why

    def __str__(self) -> str:
        return f"Error parsing loader conf at {self.path}: {self.why}"


class LoaderWriteError(Error):
    """Error writing the loader configuration."""

    _message = "Error writing loader conf"


class NotFoundError(Error):
    """Entry which is not part of the configuration."""

    def __init__(self, id: str) -> None:
        super().__init__()
        self.id = id

    def __str__(self) -> str:
        return f"Entry {self.id} not found"
