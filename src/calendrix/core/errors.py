class CalendrixError(Exception):
    """Base error."""

class InvalidCivilDate(CalendrixError, ValueError):
    """Raised when calendar fields are out of range (e.g. February 30)."""

class UnparseableDate(CalendrixError, ValueError):
    """Raised when text matches none of the accepted grammars."""

class UnknownZone(CalendrixError, LookupError):
    """Raised by a resolver for an unrecognised zone identifier."""

    def __init__(self, zone_id: str):
        super().__init__(f"Unknown zone '{zone_id}'")
        self.zone_id = zone_id

class RangeError(CalendrixError, ValueError):
    """Raised when an instant would leave the representable range."""

class MissingLocaleProvider(CalendrixError):
    """Raised when a pattern needs month/weekday names but no LocaleProvider was given."""
