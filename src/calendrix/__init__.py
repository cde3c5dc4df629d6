"""calendrix public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from loguru import logger as _logger

_logger.disable("calendrix")

# Install the default zone resolver on import
from . import api_init as _api_init  # noqa: F401,E402

from .api import (  # noqa: E402
    now,
    to_civil,
    localize,
    with_zone,
    parse,
    parse_civil,
    format_instant,
    add_calendar,
    subtract_calendar,
    add,
    difference,
    relative_bucket,
    relative,
    month_grid,
    set_resolver,
    get_resolver,
    get_settings,
    set_settings,
)
from .core.errors import (  # noqa: E402
    CalendrixError,
    InvalidCivilDate,
    MissingLocaleProvider,
    RangeError,
    UnknownZone,
    UnparseableDate,
)
from .core.time import days_in_month, is_leap_year  # noqa: E402
from .core.types import (  # noqa: E402
    BucketKind,
    CivilDate,
    Direction,
    Duration,
    Instant,
    Ordering,
    RelativeBucket,
    Unit,
)
from .core.validate import is_valid_civil_date  # noqa: E402
from .text.formatter import format_iso  # noqa: E402
from .text.locale import ENGLISH  # noqa: E402

__all__ = [
    "now",
    "to_civil",
    "localize",
    "with_zone",
    "parse",
    "parse_civil",
    "format_instant",
    "format_iso",
    "add_calendar",
    "subtract_calendar",
    "add",
    "difference",
    "relative_bucket",
    "relative",
    "month_grid",
    "set_resolver",
    "get_resolver",
    "get_settings",
    "set_settings",
    "days_in_month",
    "is_leap_year",
    "is_valid_civil_date",
    "Instant",
    "CivilDate",
    "Duration",
    "Ordering",
    "Unit",
    "RelativeBucket",
    "BucketKind",
    "Direction",
    "ENGLISH",
    "CalendrixError",
    "InvalidCivilDate",
    "UnparseableDate",
    "UnknownZone",
    "RangeError",
    "MissingLocaleProvider",
]
