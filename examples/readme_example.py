from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from fieldcopy import Ref, copy, copy_as, embedded


class OrderStatus(Enum):
    PENDING = "pending"
    SHIPPED = "shipped"


@dataclass
class Audit:
    created_by: str = ""
    updated_by: str = ""


@dataclass
class Item:
    sku: str
    quantity: int
    price: float


@dataclass
class OrderRequest:
    """Incoming payload: plain strings and floats."""

    id: int
    status: str
    items: list[Item]
    created_by: str
    note: str | None = None


@dataclass
class OrderItem:
    sku: str = ""
    quantity: int = 0
    price: Decimal = Decimal(0)

    def subtotal(self) -> Decimal:
        return self.price * self.quantity


@dataclass
class Order:
    """Domain record: enum status, Decimal prices, embedded audit fields."""

    id: int = 0
    status: OrderStatus = OrderStatus.PENDING
    items: list[OrderItem] = field(default_factory=list)
    note: str | None = None
    audit: Audit = embedded(default_factory=Audit)

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal() for item in self.items), Decimal(0))


@dataclass
class OrderSummary:
    id: int = 0
    status: str = ""
    total: float = 0.0
    created_by: str = ""


def main() -> None:
    request = OrderRequest(
        id=42,
        status="shipped",
        items=[Item("pen", 3, 1.25), Item("pad", 1, 4.5)],
        created_by="ann",
    )

    order = copy_as(Order, request)
    print(f"Order {order.id}: {order.status}, audit by {order.audit.created_by}")
    for item in order.items:
        print(f"  {item.sku} x{item.quantity} @ {item.price}")

    # Properties and zero-argument methods feed same-named fields
    summary = copy_as(OrderSummary, order)
    print(f"Summary: {summary}")

    # None never clobbers an optional field that already holds a value
    order.note = "leave at door"
    copy(order, OrderRequest(id=42, status="pending", items=[], created_by="bob"))
    print(f"After update: status={order.status}, note={order.note!r}")

    # Lists of records map element by element
    summaries = copy_as(list[OrderSummary], [order, Ref(order)])
    print(f"{len(summaries)} summaries")


if __name__ == "__main__":
    main()
