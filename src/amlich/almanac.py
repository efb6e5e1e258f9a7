"""Almanac layer — can chi names, solar terms, formatting, and month views built on the converter."""

import datetime
import logging
import math

from amlich.compute import (
    InvalidDateError,
    convert_solar_to_lunar,
    is_valid_solar_date,
    jd_from_date,
    sun_longitude,
    zone_offset_hours,
)
from amlich.i18n import t
from amlich.models import (
    CalendarCell,
    DayInfo,
    LunarDate,
    MonthView,
    QueryInput,
    SolarDate,
)

logger = logging.getLogger(__name__)

CAN = ("Giáp", "Ất", "Bính", "Đinh", "Mậu", "Kỷ", "Canh", "Tân", "Nhâm", "Quý")

CHI = (
    "Tý",
    "Sửu",
    "Dần",
    "Mão",
    "Thìn",
    "Tỵ",
    "Ngọ",
    "Mùi",
    "Thân",
    "Dậu",
    "Tuất",
    "Hợi",
)

MONTH_NAMES = (
    "Giêng",
    "Hai",
    "Ba",
    "Tư",
    "Năm",
    "Sáu",
    "Bảy",
    "Tám",
    "Chín",
    "Mười",
    "Mười Một",
    "Chạp",
)

# 24 tiết khí, 15° of solar longitude each, starting at the vernal equinox (0°)
SOLAR_TERMS = (
    "Xuân Phân",
    "Thanh Minh",
    "Cốc Vũ",
    "Lập Hạ",
    "Tiểu Mãn",
    "Mang Chủng",
    "Hạ Chí",
    "Tiểu Thử",
    "Đại Thử",
    "Lập Thu",
    "Xử Thử",
    "Bạch Lộ",
    "Thu Phân",
    "Hàn Lộ",
    "Sương Giáng",
    "Lập Đông",
    "Tiểu Tuyết",
    "Đại Tuyết",
    "Đông Chí",
    "Tiểu Hàn",
    "Đại Hàn",
    "Lập Xuân",
    "Vũ Thủy",
    "Kinh Trập",
)

# 12 stars in cycle order; True marks the six Hoàng Đạo (auspicious) stars
DAY_STARS = (
    ("Thanh Long", True),
    ("Minh Đường", True),
    ("Thiên Hình", False),
    ("Chu Tước", False),
    ("Kim Quỹ", True),
    ("Kim Đường", True),
    ("Bạch Hổ", False),
    ("Ngọc Đường", True),
    ("Thiên Lao", False),
    ("Nguyên Vũ", False),
    ("Tư Mệnh", True),
    ("Câu Trận", False),
)

DAY_OFFICERS = (
    ("Trực Kiến", "Trung bình"),
    ("Trực Trừ", "Tốt"),
    ("Trực Mãn", "Trung bình"),
    ("Trực Bình", "Trung bình"),
    ("Trực Định", "Tốt"),
    ("Trực Chấp", "Trung bình"),
    ("Trực Phá", "Xấu"),
    ("Trực Nguy", "Trung bình"),
    ("Trực Thành", "Tốt"),
    ("Trực Thu", "Trung bình"),
    ("Trực Khai", "Tốt"),
    ("Trực Bế", "Xấu"),
)

# Keyed by day branch % 6; bit i set when the two-hour period of CHI[i] is auspicious
AUSPICIOUS_HOURS = (
    "110100101100",
    "001101001011",
    "110011010010",
    "101100110100",
    "001011001101",
    "010010110011",
)


def can_chi_year(lunar_year: int) -> str:
    """Stem and branch of a lunar year, e.g. "Giáp Thìn" for 2024."""
    return f"{CAN[(lunar_year + 6) % 10]} {CHI[(lunar_year + 8) % 12]}"


def can_chi_month(lunar_month: int, lunar_year: int) -> str:
    """Stem and branch of a lunar month; a leap month shares its base month's name."""
    # Month 1 is always a Dần month; the stem cycles with the year.
    return f"{CAN[(lunar_year * 12 + lunar_month + 3) % 10]} {CHI[(lunar_month + 1) % 12]}"


def can_chi_day(jd: int) -> str:
    """Stem and branch of the day with Julian day number ``jd``."""
    return f"{CAN[(jd + 9) % 10]} {CHI[(jd + 1) % 12]}"


def solar_term_index(jd: int, time_zone: float) -> int:
    """Index (0..23) into SOLAR_TERMS in effect at the end of local day ``jd``."""
    local_midnight = jd + 0.5 - time_zone / 24
    return math.floor(sun_longitude(local_midnight) / math.pi * 12)


def day_star(lunar_month: int, jd: int) -> tuple[str, bool]:
    """Star ruling the day and whether it makes a Hoàng Đạo day.

    Thanh Long falls on branch Tý in months 1 and 7 and moves two branches
    further every following month, so months m and m + 6 share a cycle.
    """
    start_chi = (lunar_month - 1) % 6 * 2
    return DAY_STARS[((jd + 1) % 12 - start_chi) % 12]


def day_officer(jd: int, time_zone: float) -> tuple[str, str]:
    """Trực of the day with its Tốt / Trung bình / Xấu rating."""
    # Lập Xuân (term 21) opens the Dần month; each following pair of terms moves one branch
    month_chi = ((solar_term_index(jd, time_zone) + 3) // 2 + 2) % 12
    return DAY_OFFICERS[((jd + 1) % 12 - month_chi) % 12]


def auspicious_hours(jd: int) -> tuple[str, ...]:
    """The six giờ hoàng đạo of a day, e.g. "Tý (23:00-01:00)"."""
    pattern = AUSPICIOUS_HOURS[(jd + 1) % 12 % 6]
    return tuple(
        f"{CHI[i]} ({(i * 2 + 23) % 24:02d}:00-{(i * 2 + 1) % 24:02d}:00)"
        for i in range(12)
        if pattern[i] == "1"
    )


def weekday_of(jd: int) -> int:
    """Monday=0 weekday of a Julian day number."""
    return jd % 7


def format_lunar_date(lunar: LunarDate, lang: str = "vi") -> str:
    """Human-readable lunar date, e.g. "ngày 1 tháng 2 năm 2023 (nhuận)"."""
    text = t("lunar_date", lang).format(day=lunar.day, month=lunar.month, year=lunar.year)
    if lunar.is_leap_month:
        text += t("leap_suffix", lang)
    return text


def format_short(lunar: LunarDate, lang: str = "vi") -> str:
    """Compact "D/M (Âm lịch)" annotation shown next to a solar date field."""
    return t("lunar_date_short", lang).format(day=lunar.day, month=lunar.month)


def format_long(lunar: LunarDate) -> str:
    """Traditional form, e.g. "ngày 20 tháng Mười Một năm Quý Mão"."""
    month_name = MONTH_NAMES[lunar.month - 1]
    if lunar.is_leap_month:
        month_name += " nhuận"
    return f"ngày {lunar.day} tháng {month_name} năm {can_chi_year(lunar.year)}"


def day_info(solar: SolarDate, time_zone: float = 7.0) -> DayInfo:
    """Compute the full almanac annotation for one solar day.

    Raises:
        InvalidDateError: If the solar date does not exist.
    """
    lunar = convert_solar_to_lunar(solar.day, solar.month, solar.year, time_zone)
    jd = jd_from_date(solar.day, solar.month, solar.year)
    star, is_hoang_dao = day_star(lunar.month, jd)
    officer, officer_rating = day_officer(jd, time_zone)
    return DayInfo(
        solar=solar,
        jd=jd,
        time_zone=time_zone,
        lunar=lunar,
        weekday=weekday_of(jd),
        can_chi_day=can_chi_day(jd),
        can_chi_month=can_chi_month(lunar.month, lunar.year),
        can_chi_year=can_chi_year(lunar.year),
        solar_term=SOLAR_TERMS[solar_term_index(jd, time_zone)],
        day_star=star,
        is_hoang_dao=is_hoang_dao,
        day_officer=officer,
        day_officer_rating=officer_rating,
        auspicious_hours=auspicious_hours(jd),
    )


def month_view(year: int, month: int, time_zone: float = 7.0) -> MonthView:
    """Lay out a solar month with the lunar day of every cell.

    Raises:
        InvalidDateError: If month is outside 1..12.
    """
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Invalid month: {month}")

    cells: list[CalendarCell] = []
    for day in range(1, 32):
        # Skips 29..31 in short months and 5..14 Oct 1582
        if not is_valid_solar_date(day, month, year):
            continue
        lunar = convert_solar_to_lunar(day, month, year, time_zone)
        cells.append(
            CalendarCell(
                solar_day=day,
                lunar_day=lunar.day,
                lunar_month=lunar.month,
                is_leap_month=lunar.is_leap_month,
                is_month_start=lunar.day == 1,
            )
        )

    first_jd = jd_from_date(1, month, year)
    leading_blanks = (weekday_of(first_jd) + 1) % 7
    return MonthView(
        year=year, month=month, leading_blanks=leading_blanks, cells=tuple(cells)
    )


def run(query: QueryInput) -> DayInfo:
    """Top-level entry point: takes a QueryInput and returns a DayInfo.

    Args:
        query: User input (ISO date string, IANA zone name).

    Returns:
        Fully computed DayInfo.

    Raises:
        InvalidDateError: If the date string is not a real "YYYY-MM-DD" date.
        TimezoneError: If the zone is unknown.
    """
    try:
        parsed = datetime.date.fromisoformat(query.when)
    except ValueError as e:
        raise InvalidDateError(f"Invalid date string: {query.when!r}") from e
    solar = SolarDate(day=parsed.day, month=parsed.month, year=parsed.year)
    offset = zone_offset_hours(query.zone, solar)
    logger.debug("Resolved %s to UTC%+g on %s", query.zone, offset, query.when)
    return day_info(solar, offset)
