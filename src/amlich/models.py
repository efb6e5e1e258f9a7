"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class QueryInput:
    """Raw user input. Not yet validated."""

    when: str  # "YYYY-MM-DD" format string
    zone: str = "Asia/Ho_Chi_Minh"  # IANA zone name


@dataclass(frozen=True)
class SolarDate:
    """Gregorian calendar date (proleptic Julian before 15 Oct 1582)."""

    day: int
    month: int
    year: int


@dataclass(frozen=True)
class LunarDate:
    """Vietnamese lunar calendar date. The only output of the converter."""

    day: int  # 1..30
    month: int  # 1..12
    year: int
    is_leap_month: bool = False


@dataclass(frozen=True)
class DayInfo:
    """Almanac annotation for a single solar day. Input to renderers."""

    solar: SolarDate
    jd: int  # Julian day number of the solar date
    time_zone: float  # UTC offset in hours used for the conversion
    lunar: LunarDate
    weekday: int  # Monday=0 .. Sunday=6
    can_chi_day: str
    can_chi_month: str
    can_chi_year: str
    solar_term: str  # One of the 24 tiết khí
    day_star: str  # Thanh Long .. Câu Trận
    is_hoang_dao: bool  # Ruled by one of the six auspicious stars
    day_officer: str  # Trực Kiến .. Trực Bế
    day_officer_rating: str  # Tốt / Trung bình / Xấu
    auspicious_hours: tuple[str, ...]  # Six giờ hoàng đạo labels


@dataclass(frozen=True)
class CalendarCell:
    """One day in a month grid."""

    solar_day: int
    lunar_day: int
    lunar_month: int
    is_leap_month: bool
    is_month_start: bool  # First day of a lunar month


@dataclass(frozen=True)
class MonthView:
    """A solar month laid out for a Sunday-first week grid."""

    year: int
    month: int
    leading_blanks: int  # Empty cells before day 1 (Sunday=0)
    cells: tuple[CalendarCell, ...]
