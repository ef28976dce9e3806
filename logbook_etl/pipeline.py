import logging
from collections import namedtuple
from .exceptions import HeaderMismatchError, StructuralError
from .extractors import split_sections, parse_section, iter_records
from .load import load_logbook
from .transform import transform_aircraft, transform_flight
from .validation import validate_aircraft_headers, validate_flight_headers

ImportSummary = namedtuple("ImportSummary", ["aircraft", "flights"])


def run_import(raw_text, engine, strict_headers=False):
    """
    Imports one logbook export: split, parse, check headers, coerce, then
    write everything in one transaction.

    Structural and header problems are raised before the database is touched.
    """
    logging.info("Starting processing of CSV")

    aircraft_text, flights_text = split_sections(raw_text)

    aircraft_frame = parse_section(aircraft_text, "aircraft")
    flights_frame = parse_section(flights_text, "flights")

    validate_aircraft_headers(aircraft_frame, strict=strict_headers)
    validate_flight_headers(flights_frame, strict=strict_headers)

    aircraft_records = [transform_aircraft(row) for row in iter_records(aircraft_frame)]
    flight_records = [transform_flight(row) for row in iter_records(flights_frame)]
    logging.info(f"Coerced {len(aircraft_records)} aircraft and {len(flight_records)} flights.")

    aircraft_count, flight_count = load_logbook(engine, aircraft_records, flight_records)
    return ImportSummary(aircraft_count, flight_count)


def handle_import(raw_text, engine, strict_headers=False):
    """
    Runs an import and turns the outcome into a response body and status.

    Returns:
        (body, status) where body is {"success": True, ...counts} or
        {"success": False, "error": message}
    """
    try:
        summary = run_import(raw_text, engine, strict_headers=strict_headers)
    except (StructuralError, HeaderMismatchError) as e:
        logging.error(f"Rejected logbook export: {e}")
        return {"success": False, "error": str(e)}, 400
    except Exception as e:
        logging.exception(f"Logbook import failed: {e}")
        return {"success": False, "error": str(e)}, 500

    return {"success": True, "aircraft": summary.aircraft, "flights": summary.flights}, 200
