"""Printing configuration.

``PrintingConfig`` is an immutable value. Every ``with_*`` / ``excluding*``
method returns a new config, so a base config can be shared and specialised
freely:

    config = (
        PrintingConfig.for_type(Person)
        .excluding(UUID)
        .printing(float).using_culture("ru_RU")
        .printing(lambda p: p.name).trimmed_to(10)
    )
    text = config.print_to_string(person)

Registering the same key twice replaces the earlier rule.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from babel import Locale

from object_printing.culture import parse_locale
from object_printing.errors import InvalidSelector, UnsupportedMember
from object_printing.logging import get_logger
from object_printing.members import MemberDescriptor, MemberKind
from object_printing.selectors import Selector, resolve_selector

logger = get_logger(__name__)

DEFAULT_MAX_NESTING_LEVEL = 5
DEFAULT_MAX_ELEMENTS = 10

TypeSerializer = Callable[[Any], str]
MemberSerializer = Callable[[Any], str]


def _frozen(mapping: Mapping | None = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


def _updated(mapping: Mapping, key: Any, value: Any) -> Mapping:
    merged = dict(mapping)
    merged[key] = value
    return MappingProxyType(merged)


def _check_limit(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


@dataclass(frozen=True)
class PrintingConfig:
    """Overrides and limits consulted by the printer.

    ``owner`` is the root type member selectors are resolved against. Member
    rules need one, so start from ``for_type`` before registering them.
    """

    owner: type = object
    excluded_types: frozenset = frozenset()
    excluded_members: frozenset[MemberDescriptor] = frozenset()
    type_serializers: Mapping[Any, TypeSerializer] = field(default_factory=_frozen)
    member_serializers: Mapping[MemberDescriptor, MemberSerializer] = field(default_factory=_frozen)
    cultures: Mapping[Any, Locale] = field(default_factory=_frozen)
    max_lengths: Mapping[MemberDescriptor, int] = field(default_factory=_frozen)
    max_nesting_level: int = DEFAULT_MAX_NESTING_LEVEL
    max_elements: int = DEFAULT_MAX_ELEMENTS

    @classmethod
    def for_type(cls, owner: type) -> PrintingConfig:
        return cls(owner=owner)

    def _member(self, selector: Selector) -> MemberDescriptor:
        if self.owner is object and not isinstance(selector, MemberDescriptor):
            raise InvalidSelector(
                f"cannot resolve {selector!r} without an owner type; start from PrintingConfig.for_type(...)"
            )
        return resolve_selector(self.owner, selector)

    # ─── Exclusion ───────────────────────────────────────────────────────────

    def excluding(self, member_type: Any) -> PrintingConfig:
        """Skip every member declared with ``member_type``."""
        logger.debug("exclude_type", member_type=member_type)
        return replace(self, excluded_types=self.excluded_types | {member_type})

    def excluding_member(self, selector: Selector) -> PrintingConfig:
        """Skip one member, e.g. ``excluding_member(lambda p: p.height)``."""
        member = self._member(selector)
        logger.debug("exclude_member", member=member.qualname)
        return replace(self, excluded_members=self.excluded_members | {member})

    # ─── Alternate Formatting ────────────────────────────────────────────────

    def with_type_serializer(self, member_type: Any, serializer: TypeSerializer) -> PrintingConfig:
        """Format members declared as ``member_type`` with ``serializer(value)``."""
        logger.debug("type_serializer", member_type=member_type)
        return replace(self, type_serializers=_updated(self.type_serializers, member_type, serializer))

    def with_member_serializer(self, selector: Selector, serializer: MemberSerializer) -> PrintingConfig:
        """Format one member with ``serializer(owner)``.

        The serializer receives the object that owns the member at the point
        it is printed, which is not necessarily the root object.
        """
        member = self._member(selector)
        logger.debug("member_serializer", member=member.qualname)
        return replace(self, member_serializers=_updated(self.member_serializers, member, serializer))

    def with_culture(self, member_type: Any, locale: str | Locale) -> PrintingConfig:
        """Format numeric members declared as ``member_type`` for ``locale``."""
        parsed = parse_locale(locale)
        logger.debug("culture", member_type=member_type, locale=str(parsed))
        return replace(self, cultures=_updated(self.cultures, member_type, parsed))

    def with_max_length(self, selector: Selector, max_length: int) -> PrintingConfig:
        """Truncate a ``str`` member's text to at most ``max_length`` characters."""
        _check_limit("max_length", max_length)
        member = self._member(selector)
        if member.kind is not MemberKind.ATTRIBUTE and member.member_type is not str:
            raise UnsupportedMember(member.declaring_type, member.name, "only str members can be trimmed")
        logger.debug("max_length", member=member.qualname, max_length=max_length)
        return replace(self, max_lengths=_updated(self.max_lengths, member, max_length))

    # ─── Limits ──────────────────────────────────────────────────────────────

    def with_max_nesting_level(self, level: int) -> PrintingConfig:
        return replace(self, max_nesting_level=_check_limit("max_nesting_level", level))

    def with_max_elements(self, count: int) -> PrintingConfig:
        return replace(self, max_elements=_check_limit("max_elements", count))

    # ─── Fluent Entry Points ─────────────────────────────────────────────────

    def printing(self, target: Any) -> TypePrinting | MemberPrinting:
        """Start a rule for a type (``printing(float)``) or a member
        (``printing(lambda p: p.name)``)."""
        if isinstance(target, type):
            return TypePrinting(self, target)
        return MemberPrinting(self, self._member(target))

    def print_to_string(self, obj: Any) -> str:
        from object_printing.printer import ObjectPrinter

        return ObjectPrinter(self).print_to_string(obj)


@dataclass(frozen=True)
class TypePrinting:
    """Rules for every member declared with one type."""

    config: PrintingConfig
    member_type: Any

    def using(self, serializer: TypeSerializer) -> PrintingConfig:
        return self.config.with_type_serializer(self.member_type, serializer)

    def using_culture(self, locale: str | Locale) -> PrintingConfig:
        return self.config.with_culture(self.member_type, locale)


@dataclass(frozen=True)
class MemberPrinting:
    """Rules for a single member of the owner type."""

    config: PrintingConfig
    member: MemberDescriptor

    def using(self, serializer: Callable[[Any], str]) -> PrintingConfig:
        """Format the member from its value rather than from its owner."""
        member = self.member
        return self.config.with_member_serializer(member, lambda owner: serializer(member.get(owner)))

    def trimmed_to(self, max_length: int) -> PrintingConfig:
        return self.config.with_max_length(self.member, max_length)
