from pathlib import Path

# define absolute path of project root
CURRENT_FILE = Path(__file__).resolve()
PROJECT_ROOT = CURRENT_FILE.parent.parent

# path to db settings file
CONFIG_PATH = f"{PROJECT_ROOT}/config/db_config.yaml"

# path to log file
LOG_PATH = f"{PROJECT_ROOT}/logs/import_execution.log"

# db target used when none is given on the command line
DEFAULT_TARGET = "logbook"

# the exporter pads its boilerplate rows to a fixed width, so a run of
# 68 commas only ever appears between the embedded tables
SECTION_DELIMITER = "," * 68

# position of each embedded table once the export is split on SECTION_DELIMITER
AIRCRAFT_SECTION_INDEX = 2
FLIGHTS_SECTION_INDEX = 4
MIN_SECTIONS = 4
