"""Business rules for managing cars and their rental orders."""

from __future__ import annotations

import logging

from .models import (
    CarDetail,
    CarInput,
    CarList,
    OrderDetail,
    OrderInput,
    OrderList,
)
from .repository import CarRepository, OrderRepository

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors raised by the services."""


class NotFoundError(ServiceError):
    """Raised when a requested car or order does not exist."""


class CarAlreadyBookedError(ServiceError):
    """Raised when a new order overlaps an existing booking of the car."""

    def __init__(self, message: str = "car already booked") -> None:
        super().__init__(message)


class BackdateValidationError(ServiceError):
    """Raised when an order's dates are out of sequence."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__(f"backdate valdiation error: {', '.join(self.problems)}")


def _require_id(value: int) -> None:
    if value == 0:
        raise ServiceError("id cannot be 0")


class CarService:
    """Operations on cars."""

    def __init__(self, car_repo: CarRepository, order_repo: OrderRepository) -> None:
        self._car_repo = car_repo
        self._order_repo = order_repo

    def get(self, car_id: int) -> CarDetail:
        """Return the car with a summary of each of its orders."""
        _require_id(car_id)
        car = self._car_repo.find_by_id(car_id)
        if car is None:
            raise NotFoundError("car not found")
        orders = [
            OrderList(
                id=order.id,
                car_id=order.car_id,
                car_name=car.name,
                order_date=order.order_date,
            )
            for order in car.orders
        ]
        return CarDetail(
            id=car.id,
            name=car.name,
            day_rate=car.day_rate,
            month_rate=car.month_rate,
            image=car.image,
            orders=orders,
        )

    def get_all(self) -> list[CarList]:
        """Return every car; raises NotFoundError when there are none."""
        cars = self._car_repo.find_all()
        if not cars:
            raise NotFoundError("car data not found")
        return [CarList(id=car.id, name=car.name, image=car.image) for car in cars]

    def create(self, car_input: CarInput) -> int:
        """Store a new car and return its id."""
        return self._car_repo.create(car_input.to_entity())

    def update(self, car_id: int, car_input: CarInput) -> None:
        """Overwrite an existing car with the submitted data."""
        if self._car_repo.find_by_id(car_id) is None:
            raise NotFoundError("car data not found")
        car = car_input.to_entity()
        car.id = car_id
        self._car_repo.update_by_id(car)

    def delete(self, car_id: int) -> None:
        """Remove an existing car."""
        car = self._car_repo.find_by_id(car_id)
        if car is None:
            raise NotFoundError("car data not found")
        self._car_repo.delete_by_id(car)


class OrderService:
    """Operations on rental orders."""

    def __init__(self, car_repo: CarRepository, order_repo: OrderRepository) -> None:
        self._car_repo = car_repo
        self._order_repo = order_repo

    def get(self, order_id: int) -> OrderDetail:
        """Return the order with its car's name."""
        _require_id(order_id)
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise NotFoundError("order not found")
        return OrderDetail(
            id=order.id,
            car_id=order.car_id,
            car_name=order.car.name if order.car else "",
            order_date=order.order_date,
            pickup_date=order.pickup_date,
            dropoff_date=order.dropoff_date,
            pickup_location=order.pickup_location,
            dropoff_location=order.dropoff_location,
        )

    def get_all(self) -> list[OrderList]:
        """Return every order; raises NotFoundError when there are none."""
        orders = self._order_repo.find_all()
        if not orders:
            raise NotFoundError("order data not found")
        return [
            OrderList(
                id=order.id,
                car_id=order.car_id,
                car_name=order.car.name if order.car else "",
                order_date=order.order_date,
                pickup_date=order.pickup_date,
                dropoff_date=order.dropoff_date,
                pickup_location=order.pickup_location,
                dropoff_location=order.dropoff_location,
            )
            for order in orders
        ]

    def create(self, order_input: OrderInput) -> int:
        """Book a car, checking availability and date order; return the new id."""
        order = order_input.to_entity()

        car = self._car_repo.find_by_id(order_input.car_id)
        if car is None:
            raise NotFoundError("invalid car_id input")

        existing = self._order_repo.find_overlapping(
            car.id, order.pickup_date, order.dropoff_date
        )
        if existing is not None:
            logger.info("car %d already booked by order %d", car.id, existing.id)
            raise CarAlreadyBookedError()

        problems = []
        if order.order_date > order.pickup_date:
            problems.append("pickup date cannot be before order date")
        if order.pickup_date > order.dropoff_date:
            problems.append("drop off cannot be before pickup date")
        if problems:
            raise BackdateValidationError(problems)

        return self._order_repo.create(order)

    def update(self, order_id: int, order_input: OrderInput) -> None:
        """Overwrite an existing order with the submitted data."""
        if self._order_repo.find_by_id(order_id) is None:
            raise NotFoundError("order data not found")
        if self._car_repo.find_by_id(order_input.car_id) is None:
            raise NotFoundError("invalid car_id input")
        order = order_input.to_entity()
        order.id = order_id
        self._order_repo.update_by_id(order)

    def delete(self, order_id: int) -> None:
        """Remove an existing order."""
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise NotFoundError("order data not found")
        self._order_repo.delete_by_id(order)