import logging
from .exceptions import HeaderMismatchError
from .transform import (
    AIRCRAFT_HEADERS,
    FLIGHT_HEADERS,
    REQUIRED_AIRCRAFT_HEADERS,
    REQUIRED_FLIGHT_HEADERS,
)


def validate_headers(frame, expected, required, section_name, strict=False):
    """
    Checks the header of a parsed table against the headers the field
    mapping reads.

    Missing required headers always fail. Other missing headers only
    fail in strict mode; otherwise they are reported and the matching
    columns end up null.

    Returns:
        list of missing headers (in mapping order)
    """
    logging.info(f"--- Validating {section_name} headers ---")

    # an empty table has no header to check and no rows to import
    if len(frame.columns) == 0:
        logging.info(f"[{section_name}] Skipped: table is empty.")
        return []

    present = set(frame.columns)
    missing = [header for header in expected if header not in present]
    missing_required = [header for header in required if header not in present]

    if missing_required:
        logging.error(f"[{section_name}] VIOLATION: required columns missing: {missing_required}")
        raise HeaderMismatchError(section_name, missing_required)

    if missing:
        if strict:
            logging.error(f"[{section_name}] VIOLATION: {len(missing)} columns missing: {missing}")
            raise HeaderMismatchError(section_name, missing)
        logging.warning(f"[{section_name}] WARNING: {len(missing)} columns missing, they will be imported as null: {missing}")
    else:
        logging.info(f"[{section_name}] Passed: all expected columns present.")

    extra = [column for column in frame.columns if column not in expected]
    if extra:
        logging.info(f"[{section_name}] {len(extra)} columns not imported: {extra}")

    return missing


def validate_aircraft_headers(frame, strict=False):
    return validate_headers(frame, AIRCRAFT_HEADERS, REQUIRED_AIRCRAFT_HEADERS, "aircraft", strict)


def validate_flight_headers(frame, strict=False):
    return validate_headers(frame, FLIGHT_HEADERS, REQUIRED_FLIGHT_HEADERS, "flights", strict)
