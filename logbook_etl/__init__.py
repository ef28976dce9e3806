"""Import of flight logbook CSV exports into a relational database."""
