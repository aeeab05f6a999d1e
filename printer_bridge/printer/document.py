"""Delivery order documents printed as receipts."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class LineItem:
    """A single ordered product."""
    product_name: str
    quantity: int
    amount: float

    @property
    def unit_price(self) -> float:
        """Price of one unit. Not rounded; display formatting decides the digits."""
        return self.amount / self.quantity

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        return cls(
            product_name=str(data["productName"]),
            quantity=_quantity(data["quantity"]),
            amount=_number(data["amount"]),
        )


@dataclass(frozen=True)
class ReceiptDocument:
    """Order data needed to lay out one delivery receipt."""
    order_id: str
    paid_at: datetime
    buyer_name: str
    phone: str
    total_product_amount: float
    delivery_fee: float
    distance_km: float
    address1: str
    items: Tuple[LineItem, ...] = field(default_factory=tuple)
    display_code: Optional[str] = None
    delivery_hour: Optional[int] = None
    delivery_minute: Optional[int] = None
    scheduled_delivery_hour: Optional[int] = None
    scheduled_delivery_minute: Optional[int] = None
    address2: Optional[str] = None

    @property
    def total_amount(self) -> float:
        """Grand total, always derived from subtotal and delivery fee."""
        return self.total_product_amount + self.delivery_fee

    @property
    def is_scheduled(self) -> bool:
        return self.scheduled_delivery_hour is not None

    @property
    def order_label(self) -> str:
        return self.display_code or f"#{self.order_id}"

    @classmethod
    def from_dict(cls, data: dict) -> "ReceiptDocument":
        """Build a document from the inbound camelCase JSON payload.

        Presence of required fields is checked by the caller; this raises
        KeyError, TypeError or ValueError on malformed values.
        """
        return cls(
            order_id=str(data["orderId"]),
            paid_at=parse_timestamp(data["paidAt"]),
            buyer_name=str(data["buyerName"]),
            phone=str(data["phone"]),
            total_product_amount=_number(data["totalProductAmount"]),
            delivery_fee=_number(data["deliveryFee"]),
            distance_km=_number(data["distanceKm"]),
            address1=str(data["address1"]),
            items=tuple(LineItem.from_dict(item) for item in data.get("items") or []),
            display_code=_optional_str(data.get("displayCode")),
            delivery_hour=_optional_int(data.get("deliveryHour")),
            delivery_minute=_optional_int(data.get("deliveryMinute")),
            scheduled_delivery_hour=_optional_int(data.get("scheduledDeliveryHour")),
            scheduled_delivery_minute=_optional_int(data.get("scheduledDeliveryMinute")),
            address2=_optional_str(data.get("address2")),
        )


def parse_timestamp(value) -> datetime:
    """Parse an ISO 8601 timestamp into local wall-clock time."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _optional_int(value) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def _number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {value!r}")
    return value


def _quantity(value) -> int:
    quantity = int(value)
    if quantity <= 0:
        raise ValueError(f"quantity must be positive, got {quantity}")
    return quantity


def _optional_str(value) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)
