from unittest import mock

import pytest
from sqlalchemy import select

from logbook_etl.exceptions import HeaderMismatchError, StructuralError
from logbook_etl.pipeline import ImportSummary, handle_import, run_import
from logbook_etl.schema import aircrafts, flights

from conftest import DELIMITER, AIRCRAFT_ROW, FLIGHT_HEADER, FLIGHT_ROW


def rows(engine, table):
    with engine.connect() as conn:
        return conn.execute(select(table)).mappings().all()


class TestRunImport:

    def test_one_aircraft_one_flight_issues_one_call_each(self, engine, make_export):
        raw = make_export([AIRCRAFT_ROW], [FLIGHT_ROW])

        with mock.patch("logbook_etl.load.upsert_aircraft") as upsert, \
                mock.patch("logbook_etl.load.insert_flight") as insert:
            summary = run_import(raw, engine)

        assert summary == ImportSummary(aircraft=1, flights=1)
        assert upsert.call_count == 1
        assert insert.call_count == 1

        aircraft_record = upsert.call_args[0][1]
        assert aircraft_record["aircraft_id"] == "N12345"
        assert aircraft_record["year"] == 1999
        assert aircraft_record["make"] == "Cessna"
        assert aircraft_record["model"] == "172"

        flight_record = insert.call_args[0][1]
        assert flight_record["flight_date"] == "2023-01-01"
        assert flight_record["from"] == "KPAO"
        assert flight_record["to"] == "KSQL"
        assert flight_record["total_time"] == 1.5
        assert flight_record["holds"] is None
        assert flight_record["remarks"] is None
        assert flight_record["pilot_comments"] == "Pattern, 3 landings"

    def test_import_reaches_the_database(self, engine, make_export):
        run_import(make_export([AIRCRAFT_ROW], [FLIGHT_ROW]), engine)

        saved_aircraft = rows(engine, aircrafts)
        saved_flights = rows(engine, flights)
        assert [a["aircraft_id"] for a in saved_aircraft] == ["N12345"]
        assert saved_aircraft[0]["complex_aircraft"] is False
        assert len(saved_flights) == 1
        assert saved_flights[0]["aircraft_id"] == "N12345"
        assert saved_flights[0]["all_landings"] == 3

    def test_reimport_updates_make_only(self, engine, make_export):
        run_import(make_export([AIRCRAFT_ROW], []), engine)
        changed = AIRCRAFT_ROW.replace("Cessna", "Textron").replace("fixed_tricycle", "retractable")

        run_import(make_export([changed], []), engine)

        saved = rows(engine, aircrafts)
        assert len(saved) == 1
        assert saved[0]["make"] == "Textron"
        assert saved[0]["gear_type"] == "fixed_tricycle"
        assert saved[0]["engine_type"] == "Piston"

    def test_structural_error_skips_persistence(self, engine):
        raw = "title" + DELIMITER + "just one table"

        with mock.patch("logbook_etl.pipeline.load_logbook") as load:
            with pytest.raises(StructuralError):
                run_import(raw, engine)

        load.assert_not_called()

    def test_missing_required_header_skips_persistence(self, engine, make_export):
        raw = make_export([AIRCRAFT_ROW], [FLIGHT_ROW]).replace("Date,AircraftID", "Day,AircraftID")

        with mock.patch("logbook_etl.pipeline.load_logbook") as load:
            with pytest.raises(HeaderMismatchError):
                run_import(raw, engine)

        load.assert_not_called()

    def test_strict_headers(self, engine, make_export):
        raw = make_export([AIRCRAFT_ROW], [FLIGHT_ROW])

        with pytest.raises(HeaderMismatchError) as exc_info:
            run_import(raw, engine, strict_headers=True)

        assert exc_info.value.section == "flights"
        assert rows(engine, flights) == []


class TestHandleImport:

    def test_success(self, engine, make_export):
        body, status = handle_import(make_export([AIRCRAFT_ROW], [FLIGHT_ROW, FLIGHT_ROW]), engine)

        assert status == 200
        assert body == {"success": True, "aircraft": 1, "flights": 2}

    def test_empty_aircraft_table_still_imports_flights(self, engine):
        raw = ("ForeFlight Logbook Import" + DELIMITER + "\r\n"
               + "Aircraft Table" + DELIMITER + "\r\n"
               + "\r\n" + DELIMITER + "\r\n"
               + "Flights Table" + DELIMITER + "\r\n"
               + FLIGHT_HEADER + "\r\n" + FLIGHT_ROW + "\r\n")

        body, status = handle_import(raw, engine)

        assert status == 200
        assert body == {"success": True, "aircraft": 0, "flights": 1}
        assert rows(engine, aircrafts) == []
        assert len(rows(engine, flights)) == 1

    def test_structural_error_is_a_client_error(self, engine):
        body, status = handle_import("not a logbook export", engine)

        assert status == 400
        assert body["success"] is False
        assert body["error"].startswith("Invalid CSV structure")

    def test_persistence_error_rolls_back(self, engine, make_export):
        bad_flight = FLIGHT_ROW.replace("2023-01-01", "someday", 1)
        raw = make_export([AIRCRAFT_ROW], [FLIGHT_ROW, bad_flight])

        body, status = handle_import(raw, engine)

        assert status == 500
        assert body["success"] is False
        assert "flights row 2" in body["error"]
        assert rows(engine, flights) == []
        assert rows(engine, aircrafts) == []

    def test_unexpected_error_is_reported(self, engine, make_export):
        with mock.patch("logbook_etl.pipeline.load_logbook", side_effect=RuntimeError("boom")):
            body, status = handle_import(make_export([AIRCRAFT_ROW], [FLIGHT_ROW]), engine)

        assert status == 500
        assert body == {"success": False, "error": "boom"}
