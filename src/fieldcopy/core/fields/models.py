"""Field models: descriptors and the embedding marker.

Embedding promotes the fields of a member record into the enclosing record's
namespace for matching purposes:

    @dataclass
    class Audit:
        created_by: str = ""

    @dataclass
    class Order:
        id: int = 0
        audit: Annotated[Audit, Embedded] = field(default_factory=Audit)

    # or, for dataclasses:
        audit: Audit = embedded(default_factory=Audit)

`Order` then exposes `id` and `created_by` as matchable fields.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from fieldcopy.core.reference.models import Ref
from fieldcopy.core.types import MISSING, Maybe

EMBEDDED_KEY = "fieldcopy.embedded"


class Embedded:
    """Marker declaring a record-typed field as embedded.

    Use as `Annotated[Member, Embedded]` on dataclasses and Pydantic models.
    """

    __slots__ = ()


def embedded(**kwargs: Any) -> Any:
    """Declare an embedded dataclass field.

    Accepts the same keyword arguments as `dataclasses.field`.

    Returns:
        A dataclass field marked as embedded.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A named, settable slot within a record type.

    Attributes:
        name: Field name used for matching.
        type: Declared annotation of the field (Any when unresolvable).
        path: Attribute names from the outer record down to the field.
            Longer than one for fields promoted out of embedded members.
        carriers: Declared annotations of the embedded members along `path`.
        settable: False if any record along the path is frozen.
    """

    name: str
    type: Any
    path: tuple[str, ...]
    carriers: tuple[Any, ...] = ()
    settable: bool = True

    @property
    def promoted(self) -> bool:
        """True if the field comes from an embedded member."""
        return len(self.path) > 1

    def get(self, record: Any) -> Maybe[Any]:
        """Read the field from a record.

        Args:
            record: Instance of the record type this descriptor belongs to.

        Returns:
            The raw field value, or MISSING if an embedded member along the
            path is absent or the attribute is unset.
        """
        target = record
        for name in self.path[:-1]:
            target = getattr(target, name, None)
            while isinstance(target, Ref):
                target = target.unwrap()
            if target is None:
                return MISSING
        return getattr(target, self.path[-1], MISSING)

    def set(self, record: Any, value: Any) -> None:
        """Write the field on a record, allocating absent embedded members.

        Args:
            record: Instance of the record type this descriptor belongs to.
            value: Value to store.
        """
        # Late import to avoid circular dependency
        from fieldcopy.core.fields.core import new_instance
        from fieldcopy.core.reference.operations import indirect_type, is_ref_type

        target = record
        for name, carrier in zip(self.path[:-1], self.carriers, strict=True):
            member = getattr(target, name, None)
            if member is None:
                member = new_instance(indirect_type(carrier))
                setattr(target, name, Ref(member) if is_ref_type(carrier) else member)
            while isinstance(member, Ref):
                if member.value is None:
                    member.value = new_instance(indirect_type(carrier))
                member = member.value
            target = member
        setattr(target, self.path[-1], value)
