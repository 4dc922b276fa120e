"""Member metadata — which public fields and properties a type exposes.

A type's member table is built once and cached. It is assembled from:

  - class annotations along the MRO (dataclass fields, plain annotated
    attributes, annotated ``__slots__`` entries)
  - unannotated ``__slots__`` entries
  - properties and cached properties

Instance attributes that no class declares are appended per instance by
``instance_members``; their declared type is the runtime type of the value.

Names starting with an underscore are never members.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import sys
import types
import typing
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from object_printing.logging import get_logger

logger = get_logger(__name__)


class MemberKind(Enum):
    FIELD = auto()  # annotated or slotted class member
    PROPERTY = auto()  # property / cached_property
    ATTRIBUTE = auto()  # undeclared instance attribute


@dataclass(frozen=True)
class MemberDescriptor:
    """One public readable member of a type.

    Identity is ``(declaring_type, name)``; the declared type and kind are
    carried along but do not take part in equality or hashing, so a
    descriptor resolved from a selector matches the one produced while
    rendering.
    """

    declaring_type: type
    name: str
    member_type: Any = field(default=object, compare=False)
    kind: MemberKind = field(default=MemberKind.FIELD, compare=False)

    def get(self, obj: object) -> Any:
        return getattr(obj, self.name)

    @property
    def qualname(self) -> str:
        return f"{self.declaring_type.__name__}.{self.name}"


def is_public(name: str) -> bool:
    return not name.startswith("_")


# ─── Declared Types ──────────────────────────────────────────────────────────


def _unwrap_optional(hint: Any) -> Any:
    """``X | None`` and ``Optional[X]`` declare ``X``."""
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _is_class_level(hint: Any) -> bool:
    if isinstance(hint, str):
        # Unresolved text such as "ClassVar[int]".
        return hint.split("[", 1)[0].rsplit(".", 1)[-1] in ("ClassVar", "InitVar")
    if hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar:
        return True
    return isinstance(hint, dataclasses.InitVar) or hint is dataclasses.InitVar


def _declared_type(hint: Any) -> Any:
    if isinstance(hint, str):
        # Unresolvable forward reference.
        return object
    return _unwrap_optional(hint)


def _own_annotations(klass: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        # Deferred annotations (3.14+) naming something undefined at runtime.
        import annotationlib

        return dict(annotationlib.get_annotations(klass, format=annotationlib.Format.STRING))


def _resolve_hint(klass: type, name: str, hint: Any) -> Any:
    """Evaluate one annotation of ``klass`` in its defining module.

    Each annotation resolves on its own: a name that only exists for type
    checkers leaves that one member untyped, never its siblings.
    """
    if not isinstance(hint, str):
        return hint
    module = sys.modules.get(klass.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    try:
        return eval(hint, globalns, dict(vars(klass)))
    except (NameError, AttributeError, TypeError, SyntaxError) as e:
        logger.debug("type_hint_unresolved", type=klass.__qualname__, member=name, hint=hint, error=str(e))
        return hint


def _class_hints(klass: type) -> dict[str, Any]:
    """Annotations declared directly on ``klass``, resolved one by one."""
    return {name: _resolve_hint(klass, name, hint) for name, hint in _own_annotations(klass).items()}


def _return_hint(func: Any) -> Any:
    try:
        return typing.get_type_hints(func).get("return", object)
    except (NameError, TypeError):
        return object


def _slot_names(klass: type) -> list[str]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        return [slots]
    return list(slots)


# ─── Member Tables ───────────────────────────────────────────────────────────


@functools.lru_cache(maxsize=None)
def members_of(cls: type) -> tuple[MemberDescriptor, ...]:
    """Return the public readable members declared by ``cls``, sorted by name."""
    table: dict[str, MemberDescriptor] = {}

    # Base classes first so redeclarations in subclasses win.
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue

        for name, hint in _class_hints(klass).items():
            if not is_public(name) or _is_class_level(hint):
                continue
            table[name] = MemberDescriptor(klass, name, _declared_type(hint), MemberKind.FIELD)

        for name in _slot_names(klass):
            if is_public(name) and name not in table:
                table[name] = MemberDescriptor(klass, name, object, MemberKind.FIELD)

        for name, attr in vars(klass).items():
            if not is_public(name):
                continue
            if isinstance(attr, property) and attr.fget is not None:
                hint = _return_hint(attr.fget)
            elif isinstance(attr, functools.cached_property):
                hint = _return_hint(attr.func)
            else:
                continue
            table[name] = MemberDescriptor(klass, name, _declared_type(hint), MemberKind.PROPERTY)

    members = tuple(sorted(table.values(), key=lambda m: m.name))
    logger.debug("member_table_built", type=cls.__qualname__, members=[m.name for m in members])
    return members


def find_member(cls: type, name: str) -> MemberDescriptor | None:
    for member in members_of(cls):
        if member.name == name:
            return member
    return None


def instance_members(obj: object) -> list[MemberDescriptor]:
    """Members of ``obj``: its type's table plus undeclared instance attributes."""
    cls = type(obj)
    members = list(members_of(cls))
    if isinstance(obj, type):
        return members

    attrs = getattr(obj, "__dict__", None)
    if not attrs:
        return members

    declared = {m.name for m in members}
    for name, value in attrs.items():
        if is_public(name) and name not in declared:
            members.append(MemberDescriptor(cls, name, type(value), MemberKind.ATTRIBUTE))
    members.sort(key=lambda m: m.name)
    return members


def rule_keys(member: MemberDescriptor) -> Iterator[MemberDescriptor]:
    """Descriptors a per-member rule for ``member`` may be registered under.

    Declared members are keyed by their declaring class. An undeclared
    instance attribute has no declaring class, so a rule registered on any
    class in the owner's MRO applies to it, most derived first.
    """
    if member.kind is not MemberKind.ATTRIBUTE:
        yield member
        return
    for klass in member.declaring_type.__mro__:
        if klass is not object:
            yield MemberDescriptor(klass, member.name, member.member_type, member.kind)
