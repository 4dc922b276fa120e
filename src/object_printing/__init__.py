"""object-printing: configurable indented text dumps of object graphs."""

from typing import Any

from object_printing.config import (
    DEFAULT_MAX_ELEMENTS,
    DEFAULT_MAX_NESTING_LEVEL,
    MemberPrinting,
    PrintingConfig,
    TypePrinting,
)
from object_printing.errors import InvalidSelector, ObjectPrintingError, RenderError, UnsupportedMember
from object_printing.members import MemberDescriptor, MemberKind, members_of
from object_printing.printer import ObjectPrinter
from object_printing.selectors import resolve_selector


def print_to_string(obj: Any, config: PrintingConfig | None = None) -> str:
    """Render ``obj`` as an indented text tree.

    Args:
        obj: Any object; ``None``, scalars, sequences and plain objects are
            all accepted.
        config: Overrides and limits; defaults to ``PrintingConfig()``.

    Returns:
        The rendering, one newline-terminated line per value or member.

    Raises:
        RenderError: A member getter or a custom serializer failed.
    """
    return ObjectPrinter(config).print_to_string(obj)


__all__ = [
    "DEFAULT_MAX_ELEMENTS",
    "DEFAULT_MAX_NESTING_LEVEL",
    "InvalidSelector",
    "MemberDescriptor",
    "MemberKind",
    "MemberPrinting",
    "ObjectPrinter",
    "ObjectPrintingError",
    "PrintingConfig",
    "RenderError",
    "TypePrinting",
    "UnsupportedMember",
    "members_of",
    "print_to_string",
    "resolve_selector",
]
