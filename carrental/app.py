"""HTTP API for managing cars and rental orders."""

from __future__ import annotations

import argparse
import logging
import os
import re
from collections.abc import Mapping
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any, Callable

from flask import Flask, Response, jsonify, request, send_from_directory

from .db import DEFAULT_DATABASE, connect, migrate
from .models import CarInput, OrderInput, ValidationError
from .repository import CarRepository, OrderRepository
from .services import (
    BackdateValidationError,
    CarAlreadyBookedError,
    CarService,
    OrderService,
)

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_INTERNAL_ERROR = "Internal server error"


def _text(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _parse_id(raw: str) -> int | None:
    return int(raw) if _ID_PATTERN.fullmatch(raw) else None


def _request_data() -> Mapping[str, Any]:
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, Mapping) else {}
    return request.form


def _bind(factory: Callable[[Mapping[str, Any]], Any]) -> Any:
    """Build an input object from the request; raises ValidationError."""
    return factory(_request_data())


def create_app(
    car_service: CarService,
    order_service: OrderService,
    assets_dir: str = "assets",
) -> Flask:
    """Build the web application serving the car and order API."""
    app = Flask(__name__, static_folder=None)
    app.json.sort_keys = False
    assets_path = os.path.abspath(assets_dir)

    def save_image() -> str | None:
        upload = request.files.get("image")
        if upload is None or not upload.filename:
            return None
        name = PurePosixPath(PureWindowsPath(upload.filename).name).name
        if not name:
            return None
        os.makedirs(assets_path, exist_ok=True)
        upload.save(os.path.join(assets_path, name))
        return name

    @app.get("/assets/<path:filename>")
    def assets(filename: str) -> Response:
        return send_from_directory(assets_path, filename)

    @app.get("/ping")
    def ping() -> Response:
        return jsonify({"message": "pong"})

    @app.get("/api/v1/car/<raw_id>")
    def get_car(raw_id: str) -> Response:
        car_id = _parse_id(raw_id)
        if car_id is None:
            return _text("Invalid car id", 400)
        try:
            car = car_service.get(car_id)
        except Exception:
            logger.exception("fetching car %s failed", car_id)
            return _text(_INTERNAL_ERROR, 500)
        return jsonify(car.to_dict())

    @app.get("/api/v1/car")
    def list_cars() -> Response:
        try:
            cars = car_service.get_all()
        except Exception:
            logger.exception("listing cars failed")
            return _text(_INTERNAL_ERROR, 500)
        return jsonify([car.to_dict() for car in cars])

    @app.post("/api/v1/car")
    def create_car() -> Response:
        try:
            car_input = _bind(CarInput.from_mapping)
        except ValidationError as exc:
            return _text(str(exc), 400)
        image_name = save_image()
        if image_name is None:
            return _text("missing image file", 400)
        car_input.image_name = image_name
        try:
            car_service.create(car_input)
        except Exception:
            logger.exception("creating car failed")
            return _text(_INTERNAL_ERROR, 500)
        return _text("Car data successfully created", 201)

    @app.put("/api/v1/car/<raw_id>")
    def update_car(raw_id: str) -> Response:
        car_id = _parse_id(raw_id)
        if car_id is None:
            return _text("Invalid car id", 400)
        try:
            car_input = _bind(CarInput.from_mapping)
        except ValidationError as exc:
            return _text(str(exc), 400)
        image_name = save_image()
        if image_name is None:
            return _text("missing image file", 400)
        car_input.image_name = image_name
        try:
            car_service.update(car_id, car_input)
        except Exception:
            logger.exception("updating car %s failed", car_id)
            return _text(_INTERNAL_ERROR, 500)
        return _text(f"Car {car_input.name} data successfully updated", 200)

    @app.delete("/api/v1/car/<raw_id>")
    def delete_car(raw_id: str) -> Response:
        car_id = _parse_id(raw_id)
        if car_id is None:
            return _text("Invalid car id", 400)
        try:
            car_service.delete(car_id)
        except Exception:
            logger.exception("deleting car %s failed", car_id)
            return _text(_INTERNAL_ERROR, 500)
        return _text("Car data successfully deleted", 200)

    @app.get("/api/v1/order/<raw_id>")
    def get_order(raw_id: str) -> Response:
        order_id = _parse_id(raw_id)
        if order_id is None:
            return _text("Invalid car id", 400)
        try:
            order = order_service.get(order_id)
        except Exception:
            logger.exception("fetching order %s failed", order_id)
            return _text(_INTERNAL_ERROR, 500)
        return jsonify(order.to_dict())

    @app.get("/api/v1/order")
    def list_orders() -> Response:
        try:
            orders = order_service.get_all()
        except Exception:
            logger.exception("listing orders failed")
            return _text(_INTERNAL_ERROR, 500)
        return jsonify([order.to_dict() for order in orders])

    @app.post("/api/v1/order")
    def create_order() -> Response:
        try:
            order_input = _bind(OrderInput.from_mapping)
        except ValidationError as exc:
            return _text(str(exc), 400)
        try:
            order_service.create(order_input)
        except (CarAlreadyBookedError, BackdateValidationError) as exc:
            return _text(str(exc), 400)
        except Exception:
            logger.exception("creating order failed")
            return _text(_INTERNAL_ERROR, 500)
        return _text("Order data successfully created", 201)

    @app.put("/api/v1/order/<raw_id>")
    def update_order(raw_id: str) -> Response:
        order_id = _parse_id(raw_id)
        if order_id is None:
            return _text("Invalid order id", 400)
        try:
            order_input = _bind(OrderInput.from_mapping)
        except ValidationError as exc:
            return _text(str(exc), 400)
        try:
            order_service.update(order_id, order_input)
        except Exception:
            logger.exception("updating order %s failed", order_id)
            return _text(_INTERNAL_ERROR, 500)
        return _text("Order data succesfully updated", 200)

    @app.delete("/api/v1/order/<raw_id>")
    def delete_order(raw_id: str) -> Response:
        order_id = _parse_id(raw_id)
        if order_id is None:
            return _text("Invalid order id", 400)
        try:
            order_service.delete(order_id)
        except Exception:
            logger.exception("deleting order %s failed", order_id)
            return _text(_INTERNAL_ERROR, 500)
        return _text("Order data successfully deleted", 200)

    return app


def main(argv: list[str] | None = None) -> None:
    """Open the database, create the schema and serve the API."""
    parser = argparse.ArgumentParser(description="Car rental HTTP API.")
    parser.add_argument("--database", default=DEFAULT_DATABASE, help="SQLite database file")
    parser.add_argument("--assets", default="assets", help="directory for uploaded images")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    conn = connect(args.database)
    migrate(conn)

    car_repo = CarRepository(conn)
    order_repo = OrderRepository(conn)
    app = create_app(
        CarService(car_repo, order_repo),
        OrderService(car_repo, order_repo),
        args.assets,
    )
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()