"""Tests for field enumeration, the descriptor registry and record construction."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional

import pytest
from pydantic import BaseModel, ConfigDict, Field

from fieldcopy import MISSING, Embedded, Ref, deep_fields, embedded, new_instance
from fieldcopy.core.fields import is_frozen, is_record, zero_value


class Status(Enum):
    ACTIVE = "active"
    CLOSED = "closed"


@dataclass
class Audit:
    created_by: str = ""
    updated_by: str = ""


@dataclass
class Timestamps:
    created_at: int = 0
    audit: Audit = embedded(default_factory=Audit)


@dataclass
class Order:
    id: int = 0
    stamps: Annotated[Timestamps, Embedded] = field(default_factory=Timestamps)
    created_by: str = "shadowed"
    _secret: str = ""


@dataclass
class Shipment:
    tracking: str = ""
    audit: Annotated[Audit | None, Embedded] = None


@dataclass(frozen=True)
class FrozenPoint:
    x: int = 0


@dataclass
class Row:
    id: int = 0


@dataclass
class Required:
    id: int
    name: str
    tags: list[str]
    parent: Ref[Row] | None
    status: Status
    nested: Row
    pair: tuple[int, str]


@dataclass
class Validated:
    value: int

    def __post_init__(self):
        raise ValueError("validation must not run")


@dataclass
class Child(Row):
    label: str = ""


class Profile(BaseModel):
    nickname: str = ""
    locked: str = Field(default="", frozen=True)


class Account(BaseModel):
    id: int
    profile: Annotated[Profile, Embedded] = Field(default_factory=Profile)


class FrozenAccount(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = 0


def test_fields_in_declaration_order():
    assert [f.name for f in deep_fields(Row)] == ["id"]
    assert [f.name for f in deep_fields(Child)] == ["id", "label"]


def test_embedded_fields_are_promoted_depth_first():
    """Embedded members splice their fields in place, transitively."""
    names = [f.name for f in deep_fields(Order)]

    assert names == ["id", "created_at", "created_by", "updated_by"]


def test_first_declared_name_wins():
    """Order.created_by is shadowed by the earlier promoted Audit.created_by."""
    created_by = next(f for f in deep_fields(Order) if f.name == "created_by")

    assert created_by.path == ("stamps", "audit", "created_by")
    assert created_by.promoted


def test_private_fields_are_skipped():
    assert "_secret" not in [f.name for f in deep_fields(Order)]


def test_promoted_field_get_and_set():
    order = Order()
    created_by = next(f for f in deep_fields(Order) if f.name == "created_by")

    created_by.set(order, "ann")

    assert order.stamps.audit.created_by == "ann"
    assert created_by.get(order) == "ann"


def test_absent_embedded_member_reads_missing_and_is_allocated_on_write():
    shipment = Shipment()
    updated_by = next(f for f in deep_fields(Shipment) if f.name == "updated_by")

    assert updated_by.get(shipment) is MISSING

    updated_by.set(shipment, "bob")

    assert shipment.audit == Audit(created_by="", updated_by="bob")


def test_frozen_records_are_not_settable():
    assert is_frozen(FrozenPoint)
    assert not deep_fields(FrozenPoint)[0].settable


def test_pydantic_fields_and_embedding():
    fields = {f.name: f for f in deep_fields(Account)}

    assert list(fields) == ["id", "nickname", "locked"]
    assert fields["nickname"].path == ("profile", "nickname")
    assert fields["nickname"].settable
    assert not fields["locked"].settable


def test_pydantic_frozen_model():
    assert is_frozen(FrozenAccount)
    assert not is_frozen(Account)


def test_non_records_have_no_fields():
    assert deep_fields(int) == ()
    assert deep_fields(list[int]) == ()


def test_annotations_are_stripped_to_records():
    assert [f.name for f in deep_fields(list[Row] | None)] == ["id"]


def test_is_record():
    assert is_record(Row)
    assert is_record(Row())
    assert is_record(Account)
    assert not is_record(int)
    assert not is_record(list[Row])
    assert not is_record(Ref(Row()))


def test_registry_memoizes_tables(registry):
    first = registry.fields(Order)

    assert registry.is_cached(Order)
    assert registry.fields(Order) is first


def test_registry_lookup(registry):
    assert registry.lookup(Order, "updated_by").path == ("stamps", "audit", "updated_by")
    assert registry.lookup(Order, "missing") is None
    assert registry.lookup(Order, "_secret") is None
    assert registry.lookup(int, "real") is None


def test_registry_clear(registry):
    registry.fields(Row)
    registry.clear()

    assert not registry.is_cached(Row)


def test_new_instance_fills_zero_values():
    instance = new_instance(Required)

    assert instance.id == 0
    assert instance.name == ""
    assert instance.tags == []
    assert instance.parent is None
    assert instance.status is Status.ACTIVE
    assert instance.nested == Row()
    assert instance.pair == (0, "")


def test_new_instance_skips_post_init():
    assert new_instance(Validated).value == 0


def test_new_instance_uses_defaults_and_factories():
    first = new_instance(Timestamps)
    second = new_instance(Timestamps)

    assert first.audit == Audit()
    assert first.audit is not second.audit


def test_new_instance_pydantic():
    account = new_instance(Account)

    assert account.id == 0
    assert account.profile == Profile()


def test_new_instance_rejects_non_records():
    with pytest.raises(TypeError, match="not a dataclass or Pydantic model"):
        new_instance(int)

    with pytest.raises(TypeError):
        new_instance(Row())


def test_zero_values():
    assert zero_value(Optional[int]) is None
    assert zero_value(Ref[int]) is None
    assert zero_value(Literal["a", "b"]) == "a"
    assert zero_value(Sequence[int]) == []
    assert zero_value(Mapping[str, int]) == {}
    assert zero_value(Decimal) == Decimal(0)
    assert zero_value(bool) is False
    assert zero_value(tuple[int, ...]) == ()
    assert zero_value(object) is None
