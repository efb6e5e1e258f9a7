"""Simple two-language (vi/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "vi": "Lịch vạn niên",
        "en": "Vietnamese Lunar Calendar",
    },
    "label_date": {
        "vi": "Ngày dương lịch",
        "en": "Solar date",
    },
    "label_zone": {
        "vi": "Múi giờ",
        "en": "Time zone",
    },
    "label_lunar": {
        "vi": "Âm lịch",
        "en": "Lunar date",
    },
    "label_can_chi": {
        "vi": "Can chi",
        "en": "Sexagenary cycle",
    },
    "label_solar_term": {
        "vi": "Tiết khí",
        "en": "Solar term",
    },
    "label_day_quality": {
        "vi": "Ngày",
        "en": "Day",
    },
    "hoang_dao": {
        "vi": "Hoàng Đạo",
        "en": "auspicious",
    },
    "hac_dao": {
        "vi": "Hắc Đạo",
        "en": "inauspicious",
    },
    "label_auspicious_hours": {
        "vi": "Giờ hoàng đạo",
        "en": "Auspicious hours",
    },
    "btn_prev_month": {
        "vi": "‹ Tháng trước",
        "en": "‹ Previous",
    },
    "btn_next_month": {
        "vi": "Tháng sau ›",
        "en": "Next ›",
    },
    "btn_today": {
        "vi": "Hôm nay",
        "en": "Today",
    },
    "month_title": {
        "vi": "Tháng {month} / {year}",
        "en": "{month}/{year}",
    },
    "solar_date": {
        "vi": "{weekday}, ngày {day} tháng {month}, {year}",
        "en": "{weekday}, {day}/{month}/{year}",
    },
    "lunar_date": {
        "vi": "ngày {day} tháng {month} năm {year}",
        "en": "day {day} of month {month}, year {year}",
    },
    "lunar_date_short": {
        "vi": "{day}/{month} (Âm lịch)",
        "en": "{day}/{month} (lunar)",
    },
    "leap_suffix": {
        "vi": " (nhuận)",
        "en": " (leap)",
    },
    "can_chi_line": {
        "vi": "Ngày {day}, tháng {month}, năm {year}",
        "en": "Day {day}, month {month}, year {year}",
    },
    "error_date": {
        "vi": "Ngày không hợp lệ. ({error})",
        "en": "Invalid date. ({error})",
    },
    "error_zone": {
        "vi": "Không tìm thấy múi giờ. ({error})",
        "en": "Time zone not found. ({error})",
    },
    "footer_quote": {
        "vi": "Thời điểm tốt nhất để trồng cây là 20 năm trước. Thời điểm tốt thứ hai là ngay bây giờ.",
        "en": "The best time to plant a tree was 20 years ago. The second best time is now.",
    },
}

WEEKDAYS: dict[str, tuple[str, ...]] = {
    # Monday first, matching datetime.date.weekday()
    "vi": ("Thứ Hai", "Thứ Ba", "Thứ Tư", "Thứ Năm", "Thứ Sáu", "Thứ Bảy", "Chủ Nhật"),
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
}

# Sunday-first column headers for the month grid
WEEK_HEADER: dict[str, tuple[str, ...]] = {
    "vi": ("CN", "T2", "T3", "T4", "T5", "T6", "T7"),
    "en": ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'vi', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("vi") or key


def weekday_name(weekday: int, lang: str) -> str:
    """Name of a Monday=0 weekday index."""
    return WEEKDAYS.get(lang, WEEKDAYS["vi"])[weekday]
