import pytest
from sqlalchemy import create_engine

from logbook_etl.load import create_tables

DELIMITER = "," * 68

AIRCRAFT_HEADER = (
    "AircraftID,TypeCode,Year,Make,Model,GearType,EngineType,equipType (FAA),"
    "aircraftClass (FAA),complexAircraft (FAA),taa (FAA),highPerformance (FAA),"
    "pressurized (FAA)"
)

FLIGHT_HEADER = (
    "Date,AircraftID,From,To,Route,TimeOut,TimeOff,TimeOn,TimeIn,TotalTime,PIC,"
    "Night,Holds,Approach1,Remarks,PilotComments,Flight Review (FAA),DayTakeoffs,AllLandings"
)

AIRCRAFT_ROW = "N12345,C172,1999,Cessna,172,fixed_tricycle,Piston,aircraft,airplane_single_engine_land,FALSE,FALSE,FALSE,FALSE"
FLIGHT_ROW = "2023-01-01,N12345,KPAO,KSQL,,,,,,1.5,1.5,,,,Nice day,\"Pattern, 3 landings\",,3,3"


def pad(line, width=20):
    """Pads a row with trailing empty cells the way the exporter does."""
    return line + "," * width


@pytest.fixture
def make_export():
    """
    Builds a logbook export around the given aircraft and flights lines:
    a title row, the aircraft table, then the flights table, each table
    introduced by a delimiter-padded row.
    """
    def _make(aircraft_lines, flight_lines):
        aircraft_csv = "\r\n".join(pad(line) for line in [AIRCRAFT_HEADER] + list(aircraft_lines))
        flights_csv = "\r\n".join([FLIGHT_HEADER] + list(flight_lines))
        return (
            "ForeFlight Logbook Import" + DELIMITER + "\r\n"
            + "Aircraft Table" + DELIMITER + "\r\n"
            + aircraft_csv + "\r\n"
            + DELIMITER + "\r\n"
            + "Flights Table" + DELIMITER + "\r\n"
            + flights_csv + "\r\n"
        )
    return _make


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'logbook.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()
