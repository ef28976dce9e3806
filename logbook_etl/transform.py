"""
Field coercion for the aircraft and flights tables of a logbook export.

Each destination column is fed by exactly one source header through one
coercion rule. The rules never raise: text that cannot be read becomes
None, and one bad cell never affects the rest of the row.
"""
import math
import re

# leading number, the way the exporter's consumers read "1.5" or "2.0 hrs"
NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
INTEGER_PREFIX = re.compile(r"^\s*[+-]?\d+")


# ==========================================
# COERCION RULES
# ==========================================

def trimmed_or_null(value):
    """None for absent or whitespace-only text, otherwise the untouched value."""
    if value is None or not str(value).strip():
        return None
    return value


def numeric_or_null(value):
    if value is None:
        return None
    match = NUMBER_PREFIX.match(str(value))
    if not match:
        return None
    number = float(match.group())
    if not math.isfinite(number):
        return None
    return number


def integer_or_null(value):
    if value is None:
        return None
    match = INTEGER_PREFIX.match(str(value))
    if not match:
        return None
    return int(match.group())


def boolean_from_text(value):
    """True only for "true" in any letter case."""
    if value is None:
        return False
    return str(value).casefold() == "true"


def pass_through_or_null(value):
    if value is None or value == "":
        return None
    return value


def always_null(value):
    return None


# ==========================================
# FIELD MAPPINGS (source header, column, rule)
# ==========================================

AIRCRAFT_FIELDS = [
    ("AircraftID", "aircraft_id", pass_through_or_null),
    ("TypeCode", "type_code", pass_through_or_null),
    ("Year", "year", integer_or_null),
    ("Make", "make", pass_through_or_null),
    ("Model", "model", pass_through_or_null),
    ("GearType", "gear_type", pass_through_or_null),
    ("EngineType", "engine_type", pass_through_or_null),
    ("equipType (FAA)", "equip_type", pass_through_or_null),
    ("aircraftClass (FAA)", "aircraft_class", pass_through_or_null),
    ("complexAircraft (FAA)", "complex_aircraft", boolean_from_text),
    ("taa (FAA)", "taa", boolean_from_text),
    ("highPerformance (FAA)", "high_performance", boolean_from_text),
    ("pressurized (FAA)", "pressurized", boolean_from_text),
]

FLIGHT_FIELDS = [
    # core flight info
    ("Date", "flight_date", pass_through_or_null),
    ("AircraftID", "aircraft_id", pass_through_or_null),
    ("From", "from", pass_through_or_null),
    ("To", "to", pass_through_or_null),
    ("Route", "route", pass_through_or_null),

    # clock times
    ("TimeOut", "time_out", trimmed_or_null),
    ("TimeOff", "time_off", trimmed_or_null),
    ("TimeOn", "time_on", trimmed_or_null),
    ("TimeIn", "time_in", trimmed_or_null),
    ("OnDuty", "on_duty", trimmed_or_null),
    ("OffDuty", "off_duty", trimmed_or_null),

    # durations (hours.decimals)
    ("TotalTime", "total_time", numeric_or_null),
    ("PIC", "pic", numeric_or_null),
    ("SIC", "sic", numeric_or_null),
    ("Night", "night", numeric_or_null),
    ("Solo", "solo", numeric_or_null),
    ("CrossCountry", "cross_country", numeric_or_null),
    ("PICUS", "picus", numeric_or_null),
    ("MultiPilot", "multi_pilot", numeric_or_null),
    ("IFR", "ifr", numeric_or_null),
    ("Examiner", "examiner", numeric_or_null),
    ("NVG", "nvg", numeric_or_null),
    ("NVG Ops", "nvg_ops", numeric_or_null),

    # flight performance
    ("Distance", "distance", numeric_or_null),
    ("ActualInstrument", "actual_instrument", numeric_or_null),
    ("SimulatedInstrument", "simulated_instrument", numeric_or_null),
    ("Holds", "holds", integer_or_null),

    # hobbs & tach readings
    ("HobbsStart", "hobbs_start", numeric_or_null),
    ("HobbsEnd", "hobbs_end", numeric_or_null),
    ("TachStart", "tach_start", numeric_or_null),
    ("TachEnd", "tach_end", numeric_or_null),

    # approaches
    ("Approach1", "approach1", trimmed_or_null),
    ("Approach2", "approach2", trimmed_or_null),
    ("Approach3", "approach3", trimmed_or_null),
    ("Approach4", "approach4", trimmed_or_null),
    ("Approach5", "approach5", trimmed_or_null),
    ("Approach6", "approach6", trimmed_or_null),

    # instruction & training
    ("DualGiven", "dual_given", numeric_or_null),
    ("DualReceived", "dual_received", numeric_or_null),
    ("SimulatedFlight", "simulated_flight", numeric_or_null),
    ("GroundTraining", "ground_training", numeric_or_null),
    ("GroundTrainingGiven", "ground_training_given", numeric_or_null),
    ("InstructorName", "instructor_name", trimmed_or_null),
    ("InstructorComments", "instructor_comments", trimmed_or_null),

    # people onboard or observers
    ("Person1", "person1", trimmed_or_null),
    ("Person2", "person2", trimmed_or_null),
    ("Person3", "person3", trimmed_or_null),
    ("Person4", "person4", trimmed_or_null),
    ("Person5", "person5", trimmed_or_null),
    ("Person6", "person6", trimmed_or_null),

    # comments: the Remarks column is dropped on purpose
    ("PilotComments", "pilot_comments", trimmed_or_null),
    ("Remarks", "remarks", always_null),

    # FAA checkboxes
    ("Flight Review (FAA)", "flight_review", trimmed_or_null),
    ("IPC (FAA)", "ipc", trimmed_or_null),
    ("Checkride (FAA)", "checkride", trimmed_or_null),
    ("FAA 61.58 (FAA)", "faa6158", trimmed_or_null),
    ("NVG Proficiency (FAA)", "nvg_proficiency", trimmed_or_null),

    # takeoffs and landings
    ("DayTakeoffs", "day_takeoffs", integer_or_null),
    ("DayLandingsFullStop", "day_landings_full_stop", integer_or_null),
    ("NightTakeoffs", "night_takeoffs", integer_or_null),
    ("NightLandingsFullStop", "night_landings_full_stop", integer_or_null),
    ("AllLandings", "all_landings", integer_or_null),
]

# headers the import cannot do without
REQUIRED_AIRCRAFT_HEADERS = ["AircraftID"]
REQUIRED_FLIGHT_HEADERS = ["Date", "AircraftID"]

# source headers read for their value (Remarks is mapped but never read)
AIRCRAFT_HEADERS = [source for source, _, _ in AIRCRAFT_FIELDS]
FLIGHT_HEADERS = [source for source, _, rule in FLIGHT_FIELDS if rule is not always_null]


# ==========================================
# RECORD TRANSFORMATION
# ==========================================

def apply_fields(row, fields):
    """Builds a record keyed by column name from a raw row keyed by header name."""
    return {column: rule(row.get(source)) for source, column, rule in fields}


def transform_aircraft(row):
    return apply_fields(row, AIRCRAFT_FIELDS)


def transform_flight(row):
    return apply_fields(row, FLIGHT_FIELDS)
