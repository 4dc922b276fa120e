"""Tests for object_printing.members — member tables built from annotations, slots and properties."""

from __future__ import annotations

import functools
from dataclasses import InitVar, dataclass, field
from typing import TYPE_CHECKING, ClassVar, Optional
from uuid import UUID

from object_printing.members import (
    MemberDescriptor,
    MemberKind,
    find_member,
    instance_members,
    members_of,
    rule_keys,
)

if TYPE_CHECKING:
    from decimal import Decimal


@dataclass
class Base:
    name: str
    _secret: int = 0
    registry: ClassVar[dict] = {}


@dataclass
class Derived(Base):
    nickname: Optional[str] = None
    score: float | None = None
    seed: InitVar[int] = 0
    tags: list[str] = field(default_factory=list)

    def __post_init__(self, seed: int) -> None:
        self.extra = seed


@dataclass
class Account:
    name: str
    id: UUID
    balance: Decimal | None = None


class Person:
    def __init__(self, name: str) -> None:
        self.name = name


class Student(Person):
    pass


class Slotted:
    __slots__ = ("x", "_y")

    def __init__(self) -> None:
        self.x = 1
        self._y = 2


class WithProperties:
    def __init__(self) -> None:
        self.raw = 2

    @property
    def doubled(self) -> int:
        return self.raw * 2

    @functools.cached_property
    def label(self) -> str:
        return f"#{self.raw}"

    @property
    def _hidden(self) -> int:
        return 0

    def method(self) -> int:
        return 1


class TestMembersOf:
    def test_sorted_by_name(self):
        names = [m.name for m in members_of(Derived)]
        assert names == ["name", "nickname", "score", "tags"]

    def test_private_classvar_and_initvar_skipped(self):
        names = {m.name for m in members_of(Derived)}
        assert "_secret" not in names
        assert "registry" not in names
        assert "seed" not in names

    def test_declaring_type(self):
        assert find_member(Derived, "name").declaring_type is Base
        assert find_member(Derived, "nickname").declaring_type is Derived

    def test_optional_unwrapped(self):
        assert find_member(Derived, "nickname").member_type is str
        assert find_member(Derived, "score").member_type is float

    def test_generic_declared_type_kept(self):
        assert find_member(Derived, "tags").member_type == list[str]

    def test_slots(self):
        members = members_of(Slotted)
        assert [m.name for m in members] == ["x"]
        assert members[0].kind is MemberKind.FIELD

    def test_properties(self):
        members = {m.name: m for m in members_of(WithProperties)}
        assert set(members) == {"doubled", "label"}
        assert members["doubled"].kind is MemberKind.PROPERTY
        assert members["doubled"].member_type is int
        assert members["label"].member_type is str

    def test_table_is_cached(self):
        assert members_of(Derived) is members_of(Derived)

    def test_find_member_missing(self):
        assert find_member(Derived, "missing") is None


class TestTypeCheckingOnlyHints:
    def test_resolvable_siblings_keep_their_types(self):
        assert find_member(Account, "name").member_type is str
        assert find_member(Account, "id").member_type is UUID

    def test_unresolvable_hint_falls_back_to_object(self):
        assert find_member(Account, "balance").member_type is object

    def test_all_members_listed(self):
        assert [m.name for m in members_of(Account)] == ["balance", "id", "name"]


class TestInstanceMembers:
    def test_undeclared_attributes_appended(self):
        obj = Derived(name="a", seed=7)
        members = {m.name: m for m in instance_members(obj)}
        assert members["extra"].kind is MemberKind.ATTRIBUTE
        assert members["extra"].member_type is int
        assert members["extra"].declaring_type is Derived

    def test_sorted_after_merge(self):
        names = [m.name for m in instance_members(WithProperties())]
        assert names == ["doubled", "label", "raw"]

    def test_cached_property_value_not_duplicated(self):
        obj = WithProperties()
        _ = obj.label
        names = [m.name for m in instance_members(obj)]
        assert names.count("label") == 1


class TestMemberDescriptor:
    def test_equality_ignores_declared_type(self):
        a = MemberDescriptor(Base, "name", str, MemberKind.FIELD)
        b = MemberDescriptor(Base, "name", object, MemberKind.ATTRIBUTE)
        assert a == b
        assert hash(a) == hash(b)

    def test_different_declaring_types_differ(self):
        assert MemberDescriptor(Base, "name") != MemberDescriptor(Derived, "name")

    def test_get_and_qualname(self):
        member = find_member(Base, "name")
        assert member.get(Base(name="x")) == "x"
        assert member.qualname == "Base.name"


class TestRuleKeys:
    def test_declared_member_is_its_own_key(self):
        member = find_member(Derived, "name")
        assert list(rule_keys(member)) == [member]

    def test_attribute_keys_walk_the_mro(self):
        member = next(m for m in instance_members(Student("a")) if m.name == "name")
        keys = list(rule_keys(member))
        assert [k.declaring_type for k in keys] == [Student, Person]
        assert all(k.name == "name" for k in keys)
