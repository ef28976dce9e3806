import logging
import sys
import argparse
from pathlib import Path
from logbook_etl.settings import LOG_PATH, CONFIG_PATH, DEFAULT_TARGET
from logbook_etl.db_connection import DBConnector
from logbook_etl.load import create_tables
from logbook_etl.pipeline import handle_import


def setup_logging():
    # setup logging (write on both log file and terminal)
    Path(LOG_PATH).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_PATH),
            logging.StreamHandler(sys.stdout)
        ]
    )


def read_export(csv_path):
    # utf-8-sig drops the BOM some exporters write
    with open(csv_path, 'r', encoding='utf-8-sig', newline='') as file:
        return file.read()


def main(argv=None):
    # setup arguments
    parser = argparse.ArgumentParser(description='Import a logbook CSV export into the database.')
    parser.add_argument('csv_path', help='Path to the logbook export')
    parser.add_argument('--target', default=DEFAULT_TARGET, help='Database target from the config file')
    parser.add_argument('--config', default=CONFIG_PATH, help='Path to the db config file')
    parser.add_argument('--strict-headers', action='store_true', help='Fail when any expected column is missing')
    parser.add_argument('--init-db', action='store_true', help='Create missing tables before importing')
    args = parser.parse_args(argv)

    setup_logging()
    logging.info("Import process started")

    raw_text = read_export(args.csv_path)

    # initialization of DB connection
    dbc = DBConnector(config_path=args.config)
    engine = dbc.get_connection(args.target)

    if args.init_db:
        create_tables(engine)

    body, status = handle_import(raw_text, engine, strict_headers=args.strict_headers)

    if not body['success']:
        logging.error(f"Import process failed ({status}): {body['error']}")
        return 1

    logging.info(f"Import process finished: {body['aircraft']} aircraft, {body['flights']} flights")
    return 0


if __name__=='__main__':
    sys.exit(main())
