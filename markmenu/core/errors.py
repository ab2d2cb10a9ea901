from __future__ import annotations


class MarkMenuError(Exception):
    """Base class for every error raised by markmenu."""


class NotInitialized(MarkMenuError):
    """An accessor was used before ``Menu.init()`` / ``Menu.set_structure()``."""


class InvalidSelector(MarkMenuError):
    """The configured root selector matched no element on the host."""


class DuplicateIdentifier(MarkMenuError):
    """Two items in one hierarchy share an id."""


class InvalidAngle(MarkMenuError, ValueError):
    """A non-finite value was passed to the angle utility."""


class MenuStructureError(MarkMenuError, ValueError):
    """A JSON menu description is malformed."""
