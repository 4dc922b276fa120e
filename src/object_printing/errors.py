"""Exceptions raised by object-printing.

Configuration errors are raised synchronously while a config is being built.
Rendering raises only when a collaborator (a getter, a serializer, a locale
formatter) fails; depth and size limits never raise.
"""

from __future__ import annotations


class ObjectPrintingError(Exception):
    """Base class for all object-printing errors."""


class InvalidSelector(ObjectPrintingError, ValueError):
    """The selector is not a single direct attribute access."""


class UnsupportedMember(ObjectPrintingError, ValueError):
    """The selected member cannot take part in printing."""

    def __init__(self, owner: type, name: str, reason: str) -> None:
        super().__init__(f"{owner.__name__}.{name}: {reason}")
        self.owner = owner
        self.name = name
        self.reason = reason


class RenderError(ObjectPrintingError):
    """A member could not be read or formatted during rendering."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"failed to render {path}: {cause!r}")
        self.path = path
