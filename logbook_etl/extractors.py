import io
import logging
import re
import pandas as pd
from pandas.errors import EmptyDataError, ParserError
from .exceptions import StructuralError
from .settings import (
    SECTION_DELIMITER,
    AIRCRAFT_SECTION_INDEX,
    FLIGHTS_SECTION_INDEX,
    MIN_SECTIONS,
)

# padding left at the end of every aircraft row
TRAILING_COMMAS = re.compile(r",+\s*$")

# a single line break at the edge of the flights table
LEADING_NEWLINE = re.compile(r"^\r?\n")
TRAILING_NEWLINE = re.compile(r"\r?\n\Z")


def split_sections(raw_text):
    """
    Cuts a logbook export into the raw text of its two embedded tables.

    Returns:
        (aircraft_text, flights_text)
    """
    sections = raw_text.split(SECTION_DELIMITER)

    if len(sections) < MIN_SECTIONS:
        raise StructuralError("Invalid CSV structure", sections_found=len(sections))
    if len(sections) <= FLIGHTS_SECTION_INDEX:
        raise StructuralError(
            "Invalid CSV structure: flights table not found",
            section="flights",
            sections_found=len(sections),
        )

    logging.info(f"Export split into {len(sections)} sections.")

    # drop the line breaks around the aircraft table, then the padding of each row
    aircraft_text = sections[AIRCRAFT_SECTION_INDEX][2:-2]
    aircraft_text = "\n".join(
        TRAILING_COMMAS.sub("", line) for line in aircraft_text.split("\n")
    )

    flights_text = LEADING_NEWLINE.sub("", sections[FLIGHTS_SECTION_INDEX], count=1)
    flights_text = TRAILING_NEWLINE.sub("", flights_text, count=1)

    return aircraft_text, flights_text


def parse_section(section_text, section_name):
    """
    Reads one embedded table. The first line is the header, every value
    is kept as text; empty cells and missing trailing cells become "".
    An empty table gives an empty frame.
    """
    # an export without aircraft (or flights) still carries the table banner
    if not section_text.strip():
        logging.warning(f"Table {section_name} is empty, no rows to import.")
        return pd.DataFrame()

    try:
        frame = pd.read_csv(
            io.StringIO(section_text),
            dtype=str,
            keep_default_na=False,
            index_col=False,
            skip_blank_lines=True,
        )
    except (EmptyDataError, ParserError) as e:
        logging.error(f"Error parsing {section_name} table: {e}")
        raise StructuralError(
            f"Could not parse {section_name} table: {e}", section=section_name
        ) from e

    frame = frame.fillna("")

    logging.info(f"Table {section_name} parsed: {len(frame)} rows, {len(frame.columns)} columns.")
    return frame


def iter_records(frame):
    """Yields each row as a dict of header name -> raw text, in file order."""
    for record in frame.to_dict(orient="records"):
        yield record
