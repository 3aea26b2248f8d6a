"""Exceptions raised by the save-code codec."""

from __future__ import annotations


class SaveCodeError(ValueError):
    """Base class for every save-code failure."""


class UnsupportedVersionError(SaveCodeError):
    """The version tag is missing, unrecognized, or newer than supported."""


class ConversionError(SaveCodeError):
    """A legacy token could not be mapped while upgrading a save code."""


class MalformedSaveCodeError(SaveCodeError):
    """A save code violates the structure of the current format.

    Attributes:
        section: The save-code section the problem was found in
            (``"version"``, ``"plots"``, ``"crops"``, ``"fertilizers"``...).
    """

    def __init__(self, message: str, section: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: A human-readable description of the problem.
            section: The offending section, prepended to the message.
        """
        self.section = section
        if section:
            message = f"{section} section: {message}"
        super().__init__(message)


class UnknownCodeError(SaveCodeError):
    """A crop or fertilizer token does not resolve under the code table.

    Attributes:
        token: The offending token.
    """

    def __init__(self, message: str, token: str | None = None) -> None:
        """Initialize the error."""
        self.token = token
        super().__init__(message)


class UnknownCropError(UnknownCodeError):
    """A crop name has no code in the crop table."""
