"""Argument schema for `showtime -create`.

Flags are declared as data: each accepted flag name (aliases included)
maps to a FieldSpec describing the target field and its bounds. Unset date
components stay None on PartialDate until resolve() fills them from the
current UTC date.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from marquee.showtimes.types import ValidationError

# Tried in order; the first format that parses wins.
DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%m-%d-%Y %H:%M:%S",
    "%m-%d-%Y %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
)

DATE_FORMAT_HINT = (
    "Invalid date format. Supported formats: 2006-01-02 15:04:05, "
    "01-02-2006 15:04:05, 2006/01/02 15:04:05"
)
INVALID_CALENDAR_DATE = "Invalid date (check month/day combination and leap year)."
REQUIRED_FIELDS_HINT = 'Required: -id="id" -title="title"'


@dataclass(frozen=True)
class FieldSpec:
    """How a flag's value is parsed and where it lands."""

    name: str
    numeric: bool = False
    minimum: int = 0
    maximum: int = 0

    def parse(self, raw: str) -> str | int:
        if not self.numeric:
            return raw
        try:
            value = int(raw)
        except ValueError:
            value = None
        if value is None or not self.minimum <= value <= self.maximum:
            raise ValidationError(
                f"Invalid {self.name} value (must be {self.minimum}-{self.maximum})."
            )
        return value


_ID = FieldSpec("id")
_TITLE = FieldSpec("title")
_DATE = FieldSpec("date")
_HOUR = FieldSpec("hour", numeric=True, minimum=0, maximum=23)
_MINUTE = FieldSpec("minute", numeric=True, minimum=0, maximum=59)
_SECOND = FieldSpec("second", numeric=True, minimum=0, maximum=59)
_MONTH = FieldSpec("month", numeric=True, minimum=1, maximum=12)
_DAY = FieldSpec("day", numeric=True, minimum=1, maximum=31)
_YEAR = FieldSpec("year", numeric=True, minimum=1900, maximum=2100)

CREATE_FIELDS: dict[str, FieldSpec] = {
    "-id": _ID,
    "-title": _TITLE,
    "-date": _DATE,
    "-hour": _HOUR,
    "-hours": _HOUR,
    "-minute": _MINUTE,
    "-minutes": _MINUTE,
    "-second": _SECOND,
    "-seconds": _SECOND,
    "-sec": _SECOND,
    "-month": _MONTH,
    "-day": _DAY,
    "-year": _YEAR,
}


@dataclass
class PartialDate:
    """Date/time components where None means "not given"."""

    year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None

    def resolve(self, now: datetime) -> datetime:
        """Build a UTC datetime, defaulting the date to now and the time to 0.

        Raises:
            ValidationError: If the components do not form a real calendar
                date (e.g. February 30th).
        """
        now = now.astimezone(UTC)
        try:
            return datetime(
                self.year if self.year is not None else now.year,
                self.month if self.month is not None else now.month,
                self.day if self.day is not None else now.day,
                self.hour or 0,
                self.minute or 0,
                self.second or 0,
                tzinfo=UTC,
            )
        except ValueError as e:
            raise ValidationError(INVALID_CALENDAR_DATE) from e


@dataclass
class CreateRequest:
    """Parsed `-create` arguments."""

    id: str = ""
    title: str = ""
    date: str | None = None
    when: PartialDate = field(default_factory=PartialDate)

    def resolve_datetime(self, now: datetime) -> datetime:
        if self.date:
            return parse_date_string(self.date)
        return self.when.resolve(now)


def parse_date_string(text: str) -> datetime:
    """Parse a free-form date using the first matching DATE_FORMATS entry."""
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=UTC)
        except ValueError:
            continue
    raise ValidationError(DATE_FORMAT_HINT)


def split_flag(token: str) -> tuple[str, str] | None:
    """Split `-flag=value`; returns None for tokens without `=`."""
    name, sep, value = token.partition("=")
    if not sep:
        return None
    return name, value.strip('"')


def parse_create_args(tokens: list[str]) -> CreateRequest:
    """Parse the tokens following `-create` into a CreateRequest.

    Unknown flags are ignored. A later occurrence of a flag overrides an
    earlier one.

    Raises:
        ValidationError: On an out-of-range or non-numeric component, or when
            id or title is missing.
    """
    request = CreateRequest()
    for token in tokens:
        parsed = split_flag(token)
        if parsed is None:
            continue
        flag, raw = parsed
        field_spec = CREATE_FIELDS.get(flag)
        if field_spec is None:
            continue
        # Text fields live on the request, numeric components on the date
        target = request.when if field_spec.numeric else request
        setattr(target, field_spec.name, field_spec.parse(raw))

    if not request.id or not request.title:
        raise ValidationError(REQUIRED_FIELDS_HINT)
    return request
