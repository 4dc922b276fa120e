"""Tests for object_printing.selectors — resolving member selectors."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from object_printing.errors import InvalidSelector, UnsupportedMember
from object_printing.members import MemberDescriptor, MemberKind
from object_printing.selectors import resolve_selector, selector_path


@dataclass
class Person:
    name: str
    age: int
    friend: Person | None = None

    species = "human"

    def greet(self) -> str:
        return "hi"

    @staticmethod
    def make() -> Person:
        return Person("a", 1)


class Plain:
    def __init__(self) -> None:
        self.value = 1


class TestSelectorPath:
    def test_lambda(self):
        assert selector_path(lambda p: p.name) == ("name",)

    def test_chained_lambda(self):
        assert selector_path(lambda p: p.friend.name) == ("friend", "name")

    def test_string(self):
        assert selector_path("name") == ("name",)

    def test_empty_string(self):
        with pytest.raises(InvalidSelector):
            selector_path("")

    def test_identity_lambda(self):
        with pytest.raises(InvalidSelector):
            selector_path(lambda p: p)

    def test_constant_lambda(self):
        with pytest.raises(InvalidSelector):
            selector_path(lambda p: 42)

    def test_call(self):
        with pytest.raises(InvalidSelector):
            selector_path(lambda p: p.name.upper())

    def test_arithmetic(self):
        with pytest.raises(InvalidSelector):
            selector_path(lambda p: p.age * 2)

    def test_indexing(self):
        with pytest.raises(InvalidSelector):
            selector_path(lambda p: p.name[0])

    def test_not_callable(self):
        with pytest.raises(InvalidSelector):
            selector_path(3)  # type: ignore[arg-type]


class TestResolveSelector:
    def test_field(self):
        member = resolve_selector(Person, lambda p: p.age)
        assert member == MemberDescriptor(Person, "age")
        assert member.member_type is int
        assert member.kind is MemberKind.FIELD

    def test_string_field(self):
        assert resolve_selector(Person, "name") == resolve_selector(Person, lambda p: p.name)

    def test_descriptor_passes_through(self):
        member = MemberDescriptor(Person, "name", str)
        assert resolve_selector(Person, member) is member

    def test_nested_access_rejected(self):
        with pytest.raises(InvalidSelector):
            resolve_selector(Person, lambda p: p.friend.name)

    def test_dotted_string_rejected(self):
        with pytest.raises(InvalidSelector):
            resolve_selector(Person, "friend.name")

    def test_private_member(self):
        with pytest.raises(UnsupportedMember) as excinfo:
            resolve_selector(Person, lambda p: p._private)
        assert excinfo.value.owner is Person
        assert excinfo.value.name == "_private"

    def test_method(self):
        with pytest.raises(UnsupportedMember):
            resolve_selector(Person, lambda p: p.greet)

    def test_static_method(self):
        with pytest.raises(UnsupportedMember):
            resolve_selector(Person, "make")

    def test_class_attribute(self):
        with pytest.raises(UnsupportedMember):
            resolve_selector(Person, lambda p: p.species)

    def test_instance_attribute(self):
        member = resolve_selector(Plain, lambda p: p.value)
        assert member == MemberDescriptor(Plain, "value")
        assert member.kind is MemberKind.ATTRIBUTE
