"""Tests for copying to and from Pydantic models."""

from dataclasses import dataclass
from typing import Annotated

import pytest
from pydantic import BaseModel, ConfigDict, Field

from fieldcopy import Embedded, UnaddressableDestinationError, copy, copy_as


class UserModel(BaseModel):
    id: int
    name: str
    tags: list[str] = Field(default_factory=list)


class UserOut(BaseModel):
    id: int = 0
    name: str = ""


class FrozenUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = 0


class LockedUser(BaseModel):
    id: int = Field(default=0, frozen=True)
    name: str = ""


class Meta(BaseModel):
    source: str = ""


class Event(BaseModel):
    kind: str = ""
    meta: Annotated[Meta, Embedded] = Field(default_factory=Meta)


class AddressModel(BaseModel):
    city: str = ""


class CustomerModel(BaseModel):
    name: str = ""
    address: AddressModel = Field(default_factory=AddressModel)

    @property
    def display(self) -> str:
        return self.name.title()


@dataclass
class UserRecord:
    id: int = 0
    name: str = ""
    tags: list[str] | None = None


@dataclass
class EventRecord:
    kind: str
    source: str


@dataclass
class AddressRecord:
    city: str


@dataclass
class CustomerRecord:
    name: str = ""
    address: AddressRecord | None = None
    display: str = ""


def test_model_to_model():
    out = UserOut()

    copy(out, UserModel(id=1, name="ann"))

    assert out == UserOut(id=1, name="ann")


def test_model_to_dataclass_and_back():
    record = copy_as(UserRecord, UserModel(id=2, name="bob", tags=["a"]))

    assert record == UserRecord(id=2, name="bob", tags=["a"])

    model = copy_as(UserModel, record)

    assert model.id == 2
    assert model.tags == ["a"]


def test_required_fields_get_zero_values_when_unmatched():
    model = copy_as(UserModel, UserOut(name="ann"))

    assert model.id == 0
    assert model.name == "ann"
    assert model.tags == []


def test_frozen_model_is_unaddressable():
    with pytest.raises(UnaddressableDestinationError):
        copy(FrozenUser(), UserOut(id=1))

    with pytest.raises(UnaddressableDestinationError):
        copy_as(FrozenUser, UserOut(id=1))


def test_frozen_model_fields_keep_their_value():
    user = LockedUser(id=1, name="ann")

    copy(user, LockedUser(id=5, name="bob"))

    assert user.id == 1
    assert user.name == "bob"

    copy(user, UserRecord(id=9, name="cy"))

    assert user.id == 1
    assert user.name == "cy"


def test_embedded_model_fields():
    event = Event()

    copy(event, EventRecord(kind="created", source="api"))

    assert event.meta.source == "api"
    assert copy_as(EventRecord, event) == EventRecord(kind="created", source="api")


def test_nested_model_to_optional_dataclass_and_property():
    record = copy_as(CustomerRecord, CustomerModel(name="ann lee", address=AddressModel(city="Oslo")))

    assert record.address == AddressRecord(city="Oslo")
    assert record.display == "Ann Lee"


def test_copy_as_rejects_non_record_types():
    with pytest.raises(TypeError, match="copy_as"):
        copy_as(int, 5)
