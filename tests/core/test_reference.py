"""Tests for the Ref box and indirection helpers."""

from dataclasses import dataclass
from typing import Annotated, Optional, get_args

from fieldcopy import MISSING, Ref, indirect, indirect_type
from fieldcopy.core.reference import (
    innermost,
    is_list_type,
    is_optional,
    is_pointer_type,
    list_item_type,
    optional_inner,
)


@dataclass
class Row:
    id: int = 0


def test_indirect_follows_ref_chain():
    assert indirect(Ref(Ref(5))) == 5


def test_indirect_plain_value_is_returned_unchanged():
    row = Row()
    assert indirect(row) is row


def test_indirect_empty_chain_is_missing():
    """An empty box anywhere in the chain resolves to MISSING, not None."""
    assert indirect(Ref(Ref())) is MISSING
    assert indirect(None) is MISSING


def test_indirect_keeps_falsy_values():
    assert indirect(Ref(0)) == 0
    assert indirect("") == ""


def test_innermost_returns_last_box():
    inner = Ref(3)
    assert innermost(Ref(Ref(inner))) is inner


def test_indirect_type_strips_all_wrappers():
    assert indirect_type(Ref[list[Row]] | None) is Row
    assert indirect_type(Annotated[list[Optional[Row]], "meta"]) is Row
    assert indirect_type(tuple[Row, ...]) is Row
    assert indirect_type(int) is int


def test_indirect_type_keeps_multi_arm_union():
    result = indirect_type(int | str | None)
    assert set(get_args(result)) == {int, str}


def test_fixed_tuple_is_not_a_list_type():
    assert list_item_type(tuple[int, str]) is None
    assert not is_list_type(tuple[int, str])
    assert is_list_type(list)
    assert is_list_type(list[Row])


def test_optional_helpers():
    assert is_optional(Optional[int])
    assert is_optional(Annotated[int | None, "meta"])
    assert not is_optional(int)
    assert optional_inner(int | None) is int
    assert optional_inner(str) is str


def test_pointer_types():
    assert is_pointer_type(Ref[int])
    assert is_pointer_type(Ref)
    assert is_pointer_type(Row | None)
    assert not is_pointer_type(list[int])


def test_ref_equality_and_repr():
    assert Ref(1) == Ref(1)
    assert Ref(1) != Ref(2)
    assert repr(Ref("a")) == "Ref('a')"
    assert Ref().is_empty()


def test_ref_set_and_unwrap():
    box = Ref(1)
    box.set(2)
    assert box.unwrap() == 2
