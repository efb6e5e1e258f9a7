"""Lunar calendar computation layer — Julian days, new moons, solar longitude, and solar/lunar conversion.

Astronomical approximations follow "Astronomical Algorithms" (Jean Meeus, 1998)
as adapted for the Vietnamese calendar by Ho Ngoc Duc. The Vietnamese and
Chinese calendars share the same rules and differ only by the time zone in
which new moons and solar terms are localized (UTC+7 vs UTC+8).

All day and lunation counts use floor division. ``int()`` would truncate
toward zero and shift results for negative intermediates.
"""

import logging
import math
from datetime import datetime
from functools import lru_cache

import pytz

from amlich.models import LunarDate, SolarDate

logger = logging.getLogger(__name__)

VIETNAM_TIME_ZONE = 7.0

# First Julian day number of the Gregorian calendar (15 Oct 1582)
GREGORIAN_START_JD = 2299161

# Mean synodic month used to index lunations from the 1900 epoch
SYNODIC_MONTH = 29.530588853
_EPOCH_JD = 2415021.076998695  # New moon of 1 Jan 1900


class InvalidDateError(ValueError):
    """Calendar date that does not exist (solar or lunar)."""


class TimezoneError(Exception):
    """Time zone name not known to the tz database."""


def jd_from_date(dd: int, mm: int, yy: int) -> int:
    """Compute the Julian day number of dd/mm/yyyy.

    Dates before 15 Oct 1582 are read as Julian calendar dates. The input is
    not validated: impossible dates produce a number anyway.
    """
    a = (14 - mm) // 12
    y = yy + 4800 - a
    m = mm + 12 * a - 3
    jd = dd + (153 * m + 2) // 5 + 365 * y + y // 4 - y // 100 + y // 400 - 32045
    if jd < GREGORIAN_START_JD:
        jd = dd + (153 * m + 2) // 5 + 365 * y + y // 4 - 32083
    return jd


def jd_to_date(jd: int) -> tuple[int, int, int]:
    """Convert a Julian day number to (day, month, year)."""
    if jd >= GREGORIAN_START_JD:
        a = jd + 32044
        b = (4 * a + 3) // 146097
        c = a - (b * 146097) // 4
    else:
        b = 0
        c = jd + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = b * 100 + d - 4800 + m // 10
    return day, month, year


def new_moon(k: int) -> float:
    """Julian date (fractional, UT) of the k-th new moon after 1 Jan 1900."""
    t = k / 1236.85  # Julian centuries from 1900 January 0.5
    t2 = t * t
    t3 = t2 * t
    dr = math.pi / 180
    jd1 = 2415020.75933 + 29.53058868 * k + 0.0001178 * t2 - 0.000000155 * t3
    jd1 = jd1 + 0.00033 * math.sin((166.56 + 132.87 * t - 0.009173 * t2) * dr)
    m = 359.2242 + 29.10535608 * k - 0.0000333 * t2 - 0.00000347 * t3  # Sun's mean anomaly
    mpr = 306.0253 + 385.81691806 * k + 0.0107306 * t2 + 0.00001236 * t3  # Moon's mean anomaly
    f = 21.2964 + 390.67050646 * k - 0.0016528 * t2 - 0.00000239 * t3  # Moon's argument of latitude
    c1 = (0.1734 - 0.000393 * t) * math.sin(m * dr) + 0.0021 * math.sin(2 * dr * m)
    c1 = c1 - 0.4068 * math.sin(mpr * dr) + 0.0161 * math.sin(dr * 2 * mpr)
    c1 = c1 - 0.0004 * math.sin(dr * 3 * mpr)
    c1 = c1 + 0.0104 * math.sin(dr * 2 * f) - 0.0051 * math.sin(dr * (m + mpr))
    c1 = c1 - 0.0074 * math.sin(dr * (m - mpr)) + 0.0004 * math.sin(dr * (2 * f + m))
    c1 = c1 - 0.0004 * math.sin(dr * (2 * f - m)) - 0.0006 * math.sin(dr * (2 * f + mpr))
    c1 = c1 + 0.0010 * math.sin(dr * (2 * f - mpr)) + 0.0005 * math.sin(dr * (2 * mpr + m))
    if t < -11:
        deltat = (
            0.001
            + 0.000839 * t
            + 0.0002261 * t2
            - 0.00000845 * t3
            - 0.000000081 * t * t3
        )
    else:
        deltat = -0.000278 + 0.000265 * t + 0.000262 * t2
    return jd1 + c1 - deltat


def sun_longitude(jdn: float) -> float:
    """Apparent longitude of the Sun at a fractional Julian day, in radians [0, 2π)."""
    t = (jdn - 2451545.0) / 36525  # Julian centuries from J2000.0
    t2 = t * t
    dr = math.pi / 180
    m = 357.52910 + 35999.05030 * t - 0.0001559 * t2 - 0.00000048 * t * t2
    l0 = 280.46645 + 36000.76983 * t + 0.0003032 * t2
    dl = (1.914600 - 0.004817 * t - 0.000014 * t2) * math.sin(dr * m)
    dl = dl + (0.019993 - 0.000101 * t) * math.sin(dr * 2 * m) + 0.000290 * math.sin(dr * 3 * m)
    longitude = (l0 + dl) * dr
    return longitude - math.pi * 2 * math.floor(longitude / (math.pi * 2))


def get_sun_longitude(day_number: int, time_zone: float) -> int:
    """Major solar term index (0..11) at local midnight starting ``day_number``.

    Each index spans 30° of ecliptic longitude; 9 means the Sun has passed
    the winter solstice (270°).
    """
    return math.floor(sun_longitude(day_number - 0.5 - time_zone / 24) / math.pi * 6)


def get_new_moon_day(k: int, time_zone: float) -> int:
    """Local day number on which the k-th new moon falls."""
    return math.floor(new_moon(k) + 0.5 + time_zone / 24)


@lru_cache(maxsize=512)
def get_lunar_month_11(yy: int, time_zone: float) -> int:
    """Day number of the new moon starting the month that contains the winter solstice of ``yy``."""
    off = jd_from_date(31, 12, yy) - 2415021
    k = math.floor(off / SYNODIC_MONTH)
    nm = get_new_moon_day(k, time_zone)
    if get_sun_longitude(nm, time_zone) >= 9:
        nm = get_new_moon_day(k - 1, time_zone)
    return nm


@lru_cache(maxsize=512)
def get_leap_month_offset(a11: int, time_zone: float) -> int:
    """Offset in months after month 11 of the leap month of a 13-month year.

    The leap month is the first month in which the Sun does not enter a new
    major solar term.
    """
    k = math.floor((a11 - _EPOCH_JD) / SYNODIC_MONTH + 0.5)
    i = 1
    arc = get_sun_longitude(get_new_moon_day(k + i, time_zone), time_zone)
    while True:
        last = arc
        i += 1
        arc = get_sun_longitude(get_new_moon_day(k + i, time_zone), time_zone)
        if arc == last or i >= 14:
            break
    return i - 1


def _leap_month_number(leap_offset: int) -> int:
    # Offset 1 doubles month 11, offset 2 doubles month 12, offset 3 month 1, ...
    return (leap_offset + 9) % 12 + 1


def is_valid_solar_date(day: int, month: int, year: int) -> bool:
    """True if the date exists in the calendar in force at that time.

    A date is real exactly when it survives a Julian-day round trip; this
    covers month lengths, both leap-year rules, and the 5..14 Oct 1582 gap.
    """
    if not 1 <= month <= 12 or day < 1:
        return False
    return jd_to_date(jd_from_date(day, month, year)) == (day, month, year)


def convert_solar_to_lunar(
    day: int, month: int, year: int, time_zone: float = VIETNAM_TIME_ZONE
) -> LunarDate:
    """Convert a solar date to the Vietnamese lunar date.

    Args:
        day: Day of month (1..31).
        month: Month (1..12).
        year: Year; dates before 15 Oct 1582 are Julian calendar dates.
        time_zone: UTC offset in hours in which new moons are localized
            (7 for Vietnam, 8 for China).

    Returns:
        LunarDate with day, month, year and leap-month flag.

    Raises:
        InvalidDateError: If the solar date does not exist.
    """
    if not is_valid_solar_date(day, month, year):
        logger.warning("Rejected solar date %s/%s/%s", day, month, year)
        raise InvalidDateError(f"Invalid solar date: {day}/{month}/{year}")

    day_number = jd_from_date(day, month, year)
    k = math.floor((day_number - _EPOCH_JD) / SYNODIC_MONTH)
    month_start = get_new_moon_day(k + 1, time_zone)
    # The true new moon can lag the mean lunation by more than a day
    while month_start > day_number:
        k -= 1
        month_start = get_new_moon_day(k + 1, time_zone)

    # Month 11 anchors bracketing the lunar year that contains month_start
    a11 = get_lunar_month_11(year, time_zone)
    b11 = a11
    if a11 >= month_start:
        lunar_year = year
        a11 = get_lunar_month_11(year - 1, time_zone)
    else:
        lunar_year = year + 1
        b11 = get_lunar_month_11(year + 1, time_zone)

    lunar_day = day_number - month_start + 1
    diff = (month_start - a11) // 29
    is_leap = False
    lunar_month = diff + 11
    if b11 - a11 > 365:
        leap_month_diff = get_leap_month_offset(a11, time_zone)
        logger.debug("13-month year after %s, leap offset %s", a11, leap_month_diff)
        if diff >= leap_month_diff:
            lunar_month = diff + 10
            is_leap = diff == leap_month_diff
    if lunar_month > 12:
        lunar_month -= 12
    if lunar_month >= 11 and diff < 4:
        lunar_year -= 1

    lunar = LunarDate(
        day=lunar_day, month=lunar_month, year=lunar_year, is_leap_month=is_leap
    )
    logger.debug("%s/%s/%s (UTC%+g) -> %s", day, month, year, time_zone, lunar)
    return lunar


def _lunar_month_index(
    lunar_month: int, lunar_year: int, is_leap_month: bool, time_zone: float
) -> int:
    """Lunation index k of the new moon starting the given lunar month."""
    if not 1 <= lunar_month <= 12:
        raise InvalidDateError(f"Invalid lunar month: {lunar_month}")
    if lunar_month < 11:
        a11 = get_lunar_month_11(lunar_year - 1, time_zone)
        b11 = get_lunar_month_11(lunar_year, time_zone)
    else:
        a11 = get_lunar_month_11(lunar_year, time_zone)
        b11 = get_lunar_month_11(lunar_year + 1, time_zone)
    k = math.floor(0.5 + (a11 - _EPOCH_JD) / SYNODIC_MONTH)
    off = (lunar_month - 11) % 12
    if b11 - a11 > 365:
        leap_off = get_leap_month_offset(a11, time_zone)
        if is_leap_month and lunar_month != _leap_month_number(leap_off):
            raise InvalidDateError(
                f"Lunar year {lunar_year} has no leap month {lunar_month}"
            )
        if is_leap_month or off >= leap_off:
            off += 1
    elif is_leap_month:
        raise InvalidDateError(
            f"Lunar year {lunar_year} has no leap month {lunar_month}"
        )
    return k + off


def convert_lunar_to_solar(
    lunar_day: int,
    lunar_month: int,
    lunar_year: int,
    is_leap_month: bool = False,
    time_zone: float = VIETNAM_TIME_ZONE,
) -> SolarDate:
    """Convert a Vietnamese lunar date back to the solar calendar.

    Args:
        lunar_day: Day of the lunar month (1..30).
        lunar_month: Lunar month (1..12).
        lunar_year: Lunar year.
        is_leap_month: Whether the date lies in the inserted (nhuận) month.
        time_zone: UTC offset in hours.

    Returns:
        The matching SolarDate.

    Raises:
        InvalidDateError: If the leap month does not exist that year, or the
            month is shorter than ``lunar_day``.
    """
    k = _lunar_month_index(lunar_month, lunar_year, is_leap_month, time_zone)
    month_start = get_new_moon_day(k, time_zone)
    length = get_new_moon_day(k + 1, time_zone) - month_start
    if not 1 <= lunar_day <= length:
        raise InvalidDateError(
            f"Lunar month {lunar_month}/{lunar_year} has {length} days, got {lunar_day}"
        )
    return SolarDate(*jd_to_date(month_start + lunar_day - 1))


def lunar_month_length(
    lunar_month: int,
    lunar_year: int,
    is_leap_month: bool = False,
    time_zone: float = VIETNAM_TIME_ZONE,
) -> int:
    """Number of days (29 or 30) in a lunar month."""
    k = _lunar_month_index(lunar_month, lunar_year, is_leap_month, time_zone)
    return get_new_moon_day(k + 1, time_zone) - get_new_moon_day(k, time_zone)


def leap_month_of_year(
    lunar_year: int, time_zone: float = VIETNAM_TIME_ZONE
) -> int | None:
    """Return the month doubled in ``lunar_year``, or None for a 12-month year.

    Months 1..10 of a lunar year sit between the month 11 anchors of the two
    preceding solar years; months 11 and 12 sit after the year's own anchor.
    """
    for anchor_year, months in ((lunar_year - 1, range(1, 11)), (lunar_year, (11, 12))):
        a11 = get_lunar_month_11(anchor_year, time_zone)
        b11 = get_lunar_month_11(anchor_year + 1, time_zone)
        if b11 - a11 > 365:
            leap = _leap_month_number(get_leap_month_offset(a11, time_zone))
            if leap in months:
                return leap
    return None


def zone_offset_hours(zone: str, day: SolarDate) -> float:
    """UTC offset in hours of an IANA zone at noon of the given date.

    Historical offsets come from the tz database, including local mean time
    before a zone adopted standard time.

    Raises:
        TimezoneError: If the zone name is unknown.
    """
    try:
        tz = pytz.timezone(zone)
    except pytz.UnknownTimeZoneError as e:
        raise TimezoneError(f"Unknown time zone: {zone}") from e
    local_dt = tz.localize(datetime(day.year, day.month, day.day, 12), is_dst=False)
    offset = local_dt.utcoffset()
    assert offset is not None
    return offset.total_seconds() / 3600
