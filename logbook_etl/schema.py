from sqlalchemy import (
    MetaData, Table, Column, ForeignKey,
    Boolean, Date, Integer, Numeric, String, Time,
)

metadata = MetaData()


def duration(name):
    # hours.decimals, read back as float
    return Column(name, Numeric(asdecimal=False))


aircrafts = Table(
    "aircrafts",
    metadata,
    Column("aircraft_id", String(20), primary_key=True, nullable=False),
    Column("type_code", String(10)),
    Column("year", Integer),
    Column("make", String(50)),
    Column("model", String(50)),
    Column("gear_type", String(50)),
    Column("engine_type", String(50)),
    Column("equip_type", String(50)),
    Column("aircraft_class", String(50)),
    Column("complex_aircraft", Boolean),
    Column("taa", Boolean),
    Column("high_performance", Boolean),
    Column("pressurized", Boolean),
)

flights = Table(
    "flights",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),

    # core flight info
    Column("flight_date", Date),
    Column("aircraft_id", String(20), ForeignKey("aircrafts.aircraft_id")),
    Column("from", String(10)),
    Column("to", String(10)),
    Column("route", String(255)),

    # times
    Column("time_out", Time),
    Column("time_off", Time),
    Column("time_on", Time),
    Column("time_in", Time),
    Column("on_duty", Time),
    Column("off_duty", Time),

    # durations
    duration("total_time"),
    duration("pic"),
    duration("sic"),
    duration("night"),
    duration("solo"),
    duration("cross_country"),
    duration("picus"),
    duration("multi_pilot"),
    duration("ifr"),
    duration("examiner"),
    duration("nvg"),
    duration("nvg_ops"),

    # flight performance
    duration("distance"),
    duration("actual_instrument"),
    duration("simulated_instrument"),
    Column("holds", Integer),

    # hobbs & tach readings
    duration("hobbs_start"),
    duration("hobbs_end"),
    duration("tach_start"),
    duration("tach_end"),

    # approaches
    Column("approach1", String(50)),
    Column("approach2", String(50)),
    Column("approach3", String(50)),
    Column("approach4", String(50)),
    Column("approach5", String(50)),
    Column("approach6", String(50)),

    # instruction & training
    duration("dual_given"),
    duration("dual_received"),
    duration("simulated_flight"),
    duration("ground_training"),
    duration("ground_training_given"),
    Column("instructor_name", String(100)),
    Column("instructor_comments", String(500)),

    # people onboard or observers
    Column("person1", String(255)),
    Column("person2", String(255)),
    Column("person3", String(255)),
    Column("person4", String(255)),
    Column("person5", String(255)),
    Column("person6", String(255)),

    # comments
    Column("pilot_comments", String(500)),
    Column("remarks", String(500)),

    # FAA checkboxes
    Column("flight_review", String(10)),
    Column("ipc", String(10)),
    Column("checkride", String(10)),
    Column("faa6158", String(10)),
    Column("nvg_proficiency", String(10)),

    # takeoffs and landings
    Column("day_takeoffs", Integer),
    Column("day_landings_full_stop", Integer),
    Column("night_takeoffs", Integer),
    Column("night_landings_full_stop", Integer),
    Column("all_landings", Integer),
)

# columns bound as date / time-of-day rather than text
DATE_COLUMNS = ["flight_date"]
TIME_COLUMNS = ["time_out", "time_off", "time_on", "time_in", "on_duty", "off_duty"]

# the only columns a re-imported aircraft may change
AIRCRAFT_UPDATE_COLUMNS = ["make", "model", "year"]
