# carrental

A small HTTP service for a car rental desk. It keeps a catalogue of cars
(name, day rate, month rate, image) and the orders placed against them. It
refuses an order that overlaps an existing booking of the same car. It also
refuses an order whose dates run backwards.

Data is kept in a local SQLite database. Uploaded car images are stored in an
assets directory and served under `/assets/`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
carrental
```

The command opens the database and creates the `cars` and `orders` tables if
they are missing. It then serves the API with Flask's built-in server.

The command takes these options:

| Option       | Default        | Meaning                          |
|--------------|----------------|----------------------------------|
| `--database` | `carrental.db` | SQLite database file             |
| `--assets`   | `assets`       | directory for uploaded images    |
| `--host`     | `0.0.0.0`      | address to listen on             |
| `--port`     | `8080`         | port to listen on                |

## API

| Method | Path                  | Purpose                                           |
|--------|-----------------------|---------------------------------------------------|
| GET    | `/ping`               | Health check, answers `{"message": "pong"}`       |
| GET    | `/assets/<file>`      | An uploaded image                                 |
| GET    | `/api/v1/car`         | List all cars (id, name, image)                   |
| GET    | `/api/v1/car/<id>`    | One car with its rates and orders                 |
| POST   | `/api/v1/car`         | Create a car (form fields plus an `image` file)   |
| PUT    | `/api/v1/car/<id>`    | Update a car (form fields plus an `image` file)   |
| DELETE | `/api/v1/car/<id>`    | Delete a car                                      |
| GET    | `/api/v1/order`       | List all orders                                   |
| GET    | `/api/v1/order/<id>`  | One order with its car's name                     |
| POST   | `/api/v1/order`       | Create an order                                   |
| PUT    | `/api/v1/order/<id>`  | Update an order                                   |
| DELETE | `/api/v1/order/<id>`  | Delete an order                                   |

### Cars

Car requests carry these fields:

- `name`, required.
- `day_rate` and `month_rate`, required, given as decimal strings.
- An uploaded `image` file, also required. Without it the server answers 400 `missing image file`.

Rates come back in JSON as decimal strings. Dates come back as
`YYYY-MM-DDT00:00:00Z`.

### Orders

Orders take these fields, sent either as a form or as a JSON body:

- `car_id`
- `order_date`, `pickup_date` and `dropoff_date`, all as `YYYY-MM-DD`
- `pickup_location`
- `dropoff_location`

Every field is required.

Creating an order fails with status 400 in two cases:

- The car already has an order whose period overlaps the new one. The message is `car already booked`.
- The dates run backwards: the pickup date is before the order date, or the drop-off date is before the pickup date. The message starts with `backdate valdiation error:`.

### Status codes

The server answers 400 in these cases:

- A missing required field.
- An id that is not an integer.

It answers 500 `Internal server error` for any other failure, including:

- A car or order that does not exist.
- An empty list.
- A rate or date that cannot be parsed.
- Deleting a car that still has orders.

Successful writes answer with a plain-text message. Creates answer 201 and
the rest answer 200.

## Using it as a library

You can put the pieces together without the command:

```python
from carrental.db import connect, migrate
from carrental.repository import CarRepository, OrderRepository
from carrental.services import CarService, OrderService
from carrental.app import create_app

conn = connect("rental.db")
migrate(conn)
cars, orders = CarRepository(conn), OrderRepository(conn)
app = create_app(CarService(cars, orders), OrderService(cars, orders), "assets")
app.run()
```

The services can also be used on their own. Inputs are built with
`CarInput.from_mapping` and `OrderInput.from_mapping`, which raise
`carrental.models.ValidationError`.

The services raise these errors from `carrental.services`:

- `NotFoundError`
- `CarAlreadyBookedError`
- `BackdateValidationError`

All three are subclasses of `ServiceError`.

## What it does not do

- It has no authentication; anyone who can reach the server can change its data.
- Storage is a single SQLite file; no other database is supported.
- The command runs Flask's development server, not a production WSGI server.