"""
Exceptions raised while importing a logbook export.

Field-level coercion problems are never errors: they degrade to null.
Everything below aborts the whole import.
"""


class LogbookImportError(Exception):
    """Base exception for all import failures."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class StructuralError(LogbookImportError):
    """
    Raised when the export cannot be cut into its embedded tables,
    or when one of the tables cannot be read as CSV.
    """

    def __init__(self, message="Invalid CSV structure", section=None, sections_found=None):
        details = {}
        if section is not None:
            details["section"] = section
        if sections_found is not None:
            details["sections_found"] = sections_found
        super().__init__(message, details)
        self.section = section
        self.sections_found = sections_found


class HeaderMismatchError(LogbookImportError):
    """Raised when a table header lacks field names the import depends on."""

    def __init__(self, section, missing):
        super().__init__(
            f"Missing columns in {section} table: {', '.join(missing)}",
            {"section": section, "missing": list(missing)},
        )
        self.section = section
        self.missing = list(missing)


class PersistenceError(LogbookImportError):
    """
    Raised when a database call fails during the import transaction.

    The transaction has already been rolled back when this propagates;
    the underlying error is kept as __cause__.
    """

    def __init__(self, message, table=None, row_number=None):
        details = {}
        if table is not None:
            details["table"] = table
        if row_number is not None:
            details["row"] = row_number
        super().__init__(message, details)
        self.table = table
        self.row_number = row_number
