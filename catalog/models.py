import re
from dataclasses import dataclass
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, computed_field

from core.exceptions import ConfigurationError

_YEAR_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")

# Acquisition date shapes found in catalog exports
_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y/%m/%d", "%Y/%m")


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month, ordered chronologically. Month is 1-indexed."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not date.min.year <= self.year <= date.max.year:
            raise ValueError(
                f"year must be in {date.min.year}..{date.max.year}, got {self.year}"
            )

    def shift(self, months: int) -> "YearMonth":
        """Move by a number of calendar months, rolling over year boundaries."""
        index = self.year * 12 + (self.month - 1) + months
        return YearMonth(index // 12, index % 12 + 1)

    def previous(self) -> "YearMonth":
        return self.shift(-1)

    def next(self) -> "YearMonth":
        return self.shift(1)

    def label(self) -> str:
        """Month name and year in the process locale, e.g. "April 2024"."""
        return date(self.year, self.month, 1).strftime("%B %Y")

    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def __str__(self) -> str:
        return self.key()

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    @classmethod
    def today(cls) -> "YearMonth":
        return cls.from_date(date.today())

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """Parse a "YYYY-MM" string.

        Raises:
            ConfigurationError: If the value is not a valid year-month
        """
        match = _YEAR_MONTH_RE.match(value or "")
        if not match:
            raise ConfigurationError(
                f"Invalid month '{value}', expected YYYY-MM", details={"value": value}
            )
        try:
            return cls(int(match.group(1)), int(match.group(2)))
        except ValueError as e:
            raise ConfigurationError(str(e), details={"value": value}) from e


def parse_acquisition_month(value: str | None) -> YearMonth | None:
    """Extract the acquisition (year, month) from a catalog date string.

    Returns None for missing or malformed dates; such books never match a month.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return YearMonth.from_date(datetime.strptime(text, fmt))
        except ValueError:
            continue
    try:
        return YearMonth.from_date(datetime.fromisoformat(text))
    except ValueError:
        return None


class Book(BaseModel):
    """A newly acquired book from the bundled catalog."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    imprint: str | None = None
    callno: str
    date: str | None = None
    lat: float
    lng: float
    bobcat_url: str | None = None

    @property
    def acquired(self) -> YearMonth | None:
        """Acquisition month, or None when the date is missing or malformed."""
        return parse_acquisition_month(self.date)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_line(self) -> str:
        """List entry text: <title> <imprint> [<callno>]"""
        parts = [self.title]
        if self.imprint:
            parts.append(self.imprint)
        parts.append(f"[{self.callno}]")
        return " ".join(parts)
