class AlmanacError(Exception):
    """Base error."""

class InputValidationError(AlmanacError, ValueError):
    """Raised when a location, year or option is outside its valid range."""

class NoEventError(AlmanacError):
    """The Sun never reaches the requested elevation (polar day or night)."""

class CollaboratorError(AlmanacError):
    """Raised when an external time-zone lookup fails."""

class TimeZoneNotFoundError(CollaboratorError, LookupError):
    """No time zone could be resolved for a location or zone name."""
