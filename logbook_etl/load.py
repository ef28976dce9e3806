import logging
import pandas as pd
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from .exceptions import PersistenceError
from .schema import (
    metadata,
    aircrafts,
    flights,
    DATE_COLUMNS,
    TIME_COLUMNS,
    AIRCRAFT_UPDATE_COLUMNS,
)

# formats the exporter writes dates and clock times in
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMATS = ["%H:%M", "%H:%M:%S"]

# dialects offering INSERT ... ON CONFLICT DO UPDATE
UPSERT_BUILDERS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def create_tables(engine):
    """
    Creates the aircrafts and flights tables when they do not exist yet.
    """
    logging.info("Creating target tables if missing...")
    metadata.create_all(engine)
    logging.info("Target tables ready.")


def parse_date(value):
    return pd.to_datetime(str(value).strip(), format=DATE_FORMAT).date()


def parse_time(value):
    text = str(value).strip()
    for time_format in TIME_FORMATS:
        try:
            return pd.to_datetime(text, format=time_format).time()
        except ValueError:
            continue
    raise ValueError(f"'{value}' is not a clock time ({' or '.join(TIME_FORMATS)})")


def prepare_flight_for_db(record):
    """
    Binds the date and clock-time text of a flight to date / time objects.
    Raises ValueError when the text does not match DATE_FORMAT / TIME_FORMATS.
    """
    values = dict(record)
    for column in DATE_COLUMNS:
        if values.get(column) is not None:
            values[column] = parse_date(values[column])
    for column in TIME_COLUMNS:
        if values.get(column) is not None:
            values[column] = parse_time(values[column])
    return values


def upsert_aircraft(conn, record):
    """
    Inserts an aircraft; if its id is already known only make, model and
    year are updated.
    """
    builder = UPSERT_BUILDERS.get(conn.dialect.name)
    if builder is None:
        raise PersistenceError(
            f"Upsert not supported on {conn.dialect.name} databases", table="aircrafts"
        )

    stmt = builder(aircrafts).values(record)
    stmt = stmt.on_conflict_do_update(
        index_elements=[aircrafts.c.aircraft_id],
        set_={column: record.get(column) for column in AIRCRAFT_UPDATE_COLUMNS},
    )
    conn.execute(stmt)


def insert_flight(conn, record):
    conn.execute(flights.insert().values(prepare_flight_for_db(record)))


def load_logbook(engine, aircraft_records, flight_records):
    """
    Writes one import in a single transaction: every aircraft first, then
    every flight, one statement per row in file order. Any failure rolls
    back the whole import.

    Returns:
        (aircraft_count, flight_count)
    """
    table, row_number = "aircrafts", 0
    aircraft_count, flight_count = 0, 0

    try:
        with engine.begin() as conn:
            for row_number, record in enumerate(aircraft_records, start=1):
                upsert_aircraft(conn, record)
                aircraft_count += 1
            logging.info(f"{aircraft_count} aircraft upserted.")

            table, row_number = "flights", 0
            for row_number, record in enumerate(flight_records, start=1):
                insert_flight(conn, record)
                flight_count += 1
            logging.info(f"{flight_count} flights inserted.")

    except (SQLAlchemyError, ValueError) as e:
        logging.error(f"Failed to load {table} row {row_number}, import rolled back: {e}")
        raise PersistenceError(
            f"Failed to load {table} row {row_number}: {e}", table=table, row_number=row_number
        ) from e

    except PersistenceError as e:
        logging.error(f"Import rolled back: {e}")
        raise e

    logging.info(f"Successfully loaded {aircraft_count} aircraft and {flight_count} flights.")
    return aircraft_count, flight_count
