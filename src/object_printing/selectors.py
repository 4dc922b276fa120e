"""Selector resolution — turn ``lambda p: p.name`` into a MemberDescriptor.

A callable selector is invoked once with a recording probe in place of a
real owner. The probe remembers every attribute access; anything else
(calling, indexing, arithmetic, returning something that is not the probe)
makes the selector invalid. Exactly one attribute access is accepted.

A plain string names the member directly.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, Union

from object_printing.errors import InvalidSelector, UnsupportedMember
from object_printing.members import MemberDescriptor, MemberKind, find_member, is_public

Selector = Union[str, Callable[[Any], Any], MemberDescriptor]

_MISSING = object()


class _Probe:
    """Stand-in owner that records the attribute path read from it."""

    __slots__ = ("_path",)

    def __init__(self, path: tuple[str, ...] = ()) -> None:
        self._path = path

    def __getattr__(self, name: str) -> _Probe:
        return _Probe(self._path + (name,))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        raise InvalidSelector(f"selector calls {'.'.join(self._path)}(); expected a plain attribute access")


def selector_path(selector: str | Callable[[Any], Any]) -> tuple[str, ...]:
    """Return the attribute path a selector reads."""
    if isinstance(selector, str):
        if not selector:
            raise InvalidSelector("empty member name")
        return tuple(selector.split("."))

    if not callable(selector):
        raise InvalidSelector(f"selector must be a member name or a callable, got {type(selector).__name__}")

    try:
        result = selector(_Probe())
    except TypeError as e:
        raise InvalidSelector(f"selector is not a direct member access: {e}") from e

    if not isinstance(result, _Probe) or not result._path:
        raise InvalidSelector("selector must return a member of its argument, e.g. lambda p: p.name")
    return result._path


def resolve_selector(owner: type, selector: Selector) -> MemberDescriptor:
    """Resolve ``selector`` against ``owner`` to a member descriptor.

    Raises:
        InvalidSelector: The selector is not one direct attribute access.
        UnsupportedMember: The attribute is private, a method, or a
            class-level attribute rather than an instance member.
    """
    if isinstance(selector, MemberDescriptor):
        return selector

    path = selector_path(selector)
    if len(path) != 1:
        raise InvalidSelector(f"selector reads {'.'.join(path)}; only a direct member of {owner.__name__} is allowed")
    name = path[0]

    if not is_public(name):
        raise UnsupportedMember(owner, name, "non-public members are never printed")

    member = find_member(owner, name)
    if member is not None:
        return member

    attr = inspect.getattr_static(owner, name, _MISSING)
    if attr is _MISSING:
        # Assigned per instance, e.g. in __init__.
        return MemberDescriptor(owner, name, object, MemberKind.ATTRIBUTE)
    if callable(attr) or isinstance(attr, (staticmethod, classmethod)):
        raise UnsupportedMember(owner, name, "is a method, not a field or property")
    raise UnsupportedMember(owner, name, "is a class attribute, not an instance member")
