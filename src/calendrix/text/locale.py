from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from calendrix.core.interfaces import NameStyle
from calendrix.core.types import Ordering


@dataclass(frozen=True)
class StaticLocaleProvider:
    """
    LocaleProvider backed by fixed name tables.

    Month tables are indexed 1..12, weekday tables 0..6 with 0 = Sunday.
    """
    months_long: Sequence[str]
    months_short: Sequence[str]
    weekdays_long: Sequence[str]
    weekdays_short: Sequence[str]
    collation_key: Callable[[str], str] = str.casefold

    def __post_init__(self) -> None:
        if len(self.months_long) != 12 or len(self.months_short) != 12:
            raise ValueError("month tables need 12 entries")
        if len(self.weekdays_long) != 7 or len(self.weekdays_short) != 7:
            raise ValueError("weekday tables need 7 entries")

    def month_name(self, index: int, style: NameStyle = "long") -> str:
        if not 1 <= index <= 12:
            raise ValueError(f"month index must be in 1..12, got {index}")
        table = self.months_long if style == "long" else self.months_short
        return table[index - 1]

    def weekday_name(self, index: int, style: NameStyle = "long") -> str:
        if not 0 <= index <= 6:
            raise ValueError(f"weekday index must be in 0..6, got {index}")
        table = self.weekdays_long if style == "long" else self.weekdays_short
        return table[index]

    def locale_compare(self, a: str, b: str) -> Ordering:
        ka, kb = self.collation_key(a), self.collation_key(b)
        if ka < kb:
            return Ordering.LESS
        if ka > kb:
            return Ordering.GREATER
        return Ordering.EQUAL


ENGLISH = StaticLocaleProvider(
    months_long=(
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    months_short=("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    weekdays_long=("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
    weekdays_short=("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
)
