"""Printer — renders an object graph as an indented text tree.

Every value renders to one or more lines, each ending in a newline. A value
rendered at depth ``d`` starts with ``d`` tabs; its members and elements are
rendered at ``d + 1``.

Decision order for a value:
  1. ``None``                    -> ``null``
  2. terminal type / enum member -> ``str(value)``
  3. already being rendered      -> ``Cyclic reference to level i``
  4. iterable                    -> sequence block
  5. anything else               -> object block

Sequence block:

    list
    \t[
    \t<element>
    \t...
    \t]

Object block (members sorted by name, omitted at the nesting limit):

    Person
    \tage = 18
    \tname = Mike

A member's text comes from, in order: its member serializer, the culture
registered for its declared type, the type serializer for its declared
type, or a recursive render. A ``str`` member with a registered max length
is trimmed last.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from itertools import islice
from typing import Any
from uuid import UUID

from object_printing.config import PrintingConfig
from object_printing.culture import format_number
from object_printing.errors import RenderError
from object_printing.logging import get_logger
from object_printing.members import MemberDescriptor, instance_members, rule_keys

logger = get_logger(__name__)

NEWLINE = "\n"
INDENT = "\t"
ELLIPSIS = "..."
NULL = "null"

TERMINAL_TYPES: frozenset[type] = frozenset(
    {int, float, bool, complex, Decimal, str, bytes, datetime, date, time, timedelta, UUID}
)


def is_terminal(value: object) -> bool:
    # Includes str/bytes subclasses, which are iterable too.
    return type(value) in TERMINAL_TYPES or isinstance(value, (str, bytes, Enum))


def ancestor_level(value: object, ancestors: tuple[object, ...]) -> int | None:
    """Index of ``value`` in ``ancestors`` by identity, or None."""
    for level, ancestor in enumerate(ancestors):
        if ancestor is value:
            return level
    return None


def truncate(text: str, max_length: int) -> str:
    """Trim a rendered line to ``max_length`` characters, keeping its newline."""
    body = text[: -len(NEWLINE)] if text.endswith(NEWLINE) else text
    return body[:max_length] + NEWLINE


def _iterate(value: Iterable) -> Iterator:
    if isinstance(value, Mapping):
        return iter(value.items())
    return iter(value)


def _type_name(value: object) -> str:
    return type(value).__name__


class ObjectPrinter:
    """Renders objects according to a ``PrintingConfig``."""

    def __init__(self, config: PrintingConfig | None = None) -> None:
        self.config = config if config is not None else PrintingConfig()

    def print_to_string(self, obj: Any) -> str:
        logger.debug(
            "print_start",
            root_type=_type_name(obj),
            max_nesting_level=self.config.max_nesting_level,
            max_elements=self.config.max_elements,
        )
        return self.render(obj, 0, ())

    def render(self, value: Any, depth: int, ancestors: tuple[object, ...]) -> str:
        if value is None:
            return NULL + NEWLINE

        if is_terminal(value):
            return str(value) + NEWLINE

        level = ancestor_level(value, ancestors)
        if level is not None:
            logger.debug("cyclic_reference", type=_type_name(value), level=level, depth=depth)
            return f"Cyclic reference to level {level}{NEWLINE}"

        if isinstance(value, Iterable):
            return self._render_sequence(value, depth, ancestors)
        return self._render_object(value, depth, ancestors)

    # ─── Sequence Block ──────────────────────────────────────────────────────

    def _render_sequence(self, value: Iterable, depth: int, ancestors: tuple[object, ...]) -> str:
        limit = self.config.max_elements
        child_indent = INDENT * (depth + 1)

        try:
            # One extra item tells whether the sequence goes on; never more.
            items = list(islice(_iterate(value), limit + 1))
        except Exception as e:
            raise RenderError(f"{_type_name(value)}[]", e) from e

        parts = [INDENT * depth + _type_name(value) + NEWLINE, child_indent + "[" + NEWLINE]
        nested = ancestors + (value,)
        for item in items[:limit]:
            parts.append(self.render(item, depth + 1, nested))

        if len(items) > limit:
            logger.debug("element_limit_reached", type=_type_name(value), max_elements=limit, depth=depth)
            parts.append(child_indent + ELLIPSIS + NEWLINE)

        parts.append(child_indent + "]" + NEWLINE)
        return "".join(parts)

    # ─── Object Block ────────────────────────────────────────────────────────

    def _render_object(self, value: Any, depth: int, ancestors: tuple[object, ...]) -> str:
        header = INDENT * depth + _type_name(value) + NEWLINE
        if depth >= self.config.max_nesting_level:
            logger.debug("nesting_limit_reached", type=_type_name(value), depth=depth)
            return header

        config = self.config
        indent = INDENT * (depth + 1)
        nested = ancestors + (value,)
        parts = [header]
        for member in instance_members(value):
            if member.member_type in config.excluded_types or _is_excluded(config, member):
                continue
            text = self._render_member(value, member, depth, nested)
            parts.append(f"{indent}{member.name} = {text}")
        return "".join(parts)

    def _render_member(
        self,
        owner: Any,
        member: MemberDescriptor,
        depth: int,
        nested: tuple[object, ...],
    ) -> str:
        config = self.config
        member_type = member.member_type

        serializer = _rule(config.member_serializers, member)
        if serializer is not None:
            text = _call(member, serializer, owner) + NEWLINE
        elif member_type in config.cultures:
            locale = config.cultures[member_type]
            text = _call(member, lambda v: format_number(v, locale), _read(member, owner)) + NEWLINE
        elif member_type in config.type_serializers:
            text = _call(member, config.type_serializers[member_type], _read(member, owner)) + NEWLINE
        else:
            text = self.render(_read(member, owner), depth + 1, nested)

        max_length = _rule(config.max_lengths, member)
        if max_length is not None and member_type is str:
            text = truncate(text, max_length)
        return text


def _rule(rules: Mapping[MemberDescriptor, Any], member: MemberDescriptor) -> Any:
    for key in rule_keys(member):
        if key in rules:
            return rules[key]
    return None


def _is_excluded(config: PrintingConfig, member: MemberDescriptor) -> bool:
    return any(key in config.excluded_members for key in rule_keys(member))


def _read(member: MemberDescriptor, owner: Any) -> Any:
    try:
        return member.get(owner)
    except Exception as e:
        raise RenderError(member.qualname, e) from e


def _call(member: MemberDescriptor, fn: Callable[[Any], str], arg: Any) -> str:
    try:
        return str(fn(arg))
    except Exception as e:
        raise RenderError(member.qualname, e) from e
