"""Persistent records for cars and their rental orders."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

_ZERO_TIME = "0001-01-01T00:00:00Z"


def _format_date(value: date | None) -> str:
    """Render a calendar date as a UTC midnight timestamp."""
    if value is None:
        return _ZERO_TIME
    return f"{value.isoformat()}T00:00:00Z"


def _format_decimal(value: Decimal) -> str:
    """Render a decimal in plain notation without trailing zeros."""
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


@dataclass
class Car:
    """A rentable car."""

    id: int = 0
    name: str = ""
    day_rate: Decimal = Decimal(0)
    month_rate: Decimal = Decimal(0)
    image: str = ""
    orders: list[Order] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "day_rate": _format_decimal(self.day_rate),
            "month_rate": _format_decimal(self.month_rate),
            "image": self.image,
            "orders": [order.to_dict() for order in self.orders],
        }


@dataclass
class Order:
    """A booking of one car between a pickup and a drop-off date."""

    id: int = 0
    car_id: int = 0
    order_date: date | None = None
    pickup_date: date | None = None
    dropoff_date: date | None = None
    pickup_location: str = ""
    dropoff_location: str = ""
    car: Car | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "car_id": self.car_id,
            "order_date": _format_date(self.order_date),
            "pickup_date": _format_date(self.pickup_date),
            "dropoff_date": _format_date(self.dropoff_date),
            "pickup_location": self.pickup_location,
            "dropoff_location": self.dropoff_location,
            "car": (self.car or Car()).to_dict(),
        }