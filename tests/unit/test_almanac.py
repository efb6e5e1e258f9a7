"""
Tests for almanac annotations, zone resolution and the run() entry point.
"""

import pytest

from amlich.almanac import (
    DAY_OFFICERS,
    DAY_STARS,
    MONTH_NAMES,
    SOLAR_TERMS,
    auspicious_hours,
    can_chi_day,
    can_chi_month,
    can_chi_year,
    day_info,
    day_officer,
    day_star,
    format_long,
    format_lunar_date,
    format_short,
    month_view,
    run,
    weekday_of,
)
from amlich.compute import InvalidDateError, TimezoneError, jd_from_date, zone_offset_hours
from amlich.i18n import t, weekday_name
from amlich.models import LunarDate, QueryInput, SolarDate


class TestCanChi:
    """Sexagenary names."""

    @pytest.mark.parametrize(
        "year, name",
        [(2024, "Giáp Thìn"), (2023, "Quý Mão"), (2025, "Ất Tỵ"), (1984, "Giáp Tý")],
    )
    def test_year(self, year, name):
        assert can_chi_year(year) == name

    def test_first_month_of_giap_year(self):
        """Month 1 of a Giáp year is Bính Dần."""
        assert can_chi_month(1, 2024) == "Bính Dần"

    def test_day(self):
        """1 Jan 2024 is a Giáp Tý day."""
        assert can_chi_day(jd_from_date(1, 1, 2024)) == "Giáp Tý"

    def test_day_cycle_is_sixty(self):
        jd = jd_from_date(1, 1, 2024)
        assert can_chi_day(jd) == can_chi_day(jd + 60)
        assert can_chi_day(jd) != can_chi_day(jd + 12)


class TestWeekday:
    def test_known_weekdays(self):
        assert weekday_of(jd_from_date(1, 1, 2024)) == 0  # Monday
        assert weekday_of(jd_from_date(10, 2, 2024)) == 5  # Saturday
        assert weekday_of(jd_from_date(1, 1, 2000)) == 5  # Saturday

    def test_weekday_names(self):
        assert weekday_name(0, "vi") == "Thứ Hai"
        assert weekday_name(6, "en") == "Sunday"


class TestFormatting:
    def test_format_lunar_date_vi(self):
        assert format_lunar_date(LunarDate(20, 11, 2023)) == "ngày 20 tháng 11 năm 2023"

    def test_format_lunar_date_leap(self):
        assert (
            format_lunar_date(LunarDate(1, 2, 2023, True))
            == "ngày 1 tháng 2 năm 2023 (nhuận)"
        )

    def test_format_lunar_date_en(self):
        assert (
            format_lunar_date(LunarDate(1, 2, 2023, True), "en")
            == "day 1 of month 2, year 2023 (leap)"
        )

    def test_format_short(self):
        assert format_short(LunarDate(20, 11, 2023)) == "20/11 (Âm lịch)"

    def test_format_long(self):
        assert format_long(LunarDate(20, 11, 2023)) == "ngày 20 tháng Mười Một năm Quý Mão"
        assert format_long(LunarDate(1, 2, 2023, True)) == "ngày 1 tháng Hai nhuận năm Quý Mão"

    def test_month_names(self):
        assert MONTH_NAMES[0] == "Giêng"
        assert MONTH_NAMES[11] == "Chạp"

    def test_unknown_key_falls_back(self):
        assert t("no_such_key", "vi") == "no_such_key"
        assert t("label_lunar", "fr") == "Âm lịch"


class TestAuspiciousDay:
    """Hoàng Đạo stars, the twelve Trực and giờ hoàng đạo."""

    def test_tables(self):
        assert len(DAY_STARS) == 12
        assert sum(good for _, good in DAY_STARS) == 6
        assert len(DAY_OFFICERS) == 12

    def test_thanh_long_starts_month_1_on_ty(self):
        jd = jd_from_date(1, 1, 2024)  # Giáp Tý day
        assert day_star(1, jd) == ("Thanh Long", True)
        assert day_star(7, jd) == ("Thanh Long", True)
        assert day_star(2, jd) == ("Tư Mệnh", True)
        assert day_star(3, jd) == ("Thiên Lao", False)

    def test_star_cycle_repeats_every_six_months(self):
        jd = jd_from_date(10, 2, 2024)
        for month in range(1, 7):
            assert day_star(month, jd) == day_star(month + 6, jd)

    def test_kien_day_matches_month_branch(self):
        """1 Jan 2024 is a Tý day inside the Tý month (Đông Chí)."""
        assert day_officer(jd_from_date(1, 1, 2024), 7) == ("Trực Kiến", "Trung bình")

    def test_officer_after_lap_xuan(self):
        """Tết 2024 is a Thìn day two branches after the Dần month."""
        assert day_officer(jd_from_date(10, 2, 2024), 7) == ("Trực Mãn", "Trung bình")

    def test_hours_of_ty_day(self):
        assert auspicious_hours(jd_from_date(1, 1, 2024)) == (
            "Tý (23:00-01:00)",
            "Sửu (01:00-03:00)",
            "Mão (05:00-07:00)",
            "Ngọ (11:00-13:00)",
            "Thân (15:00-17:00)",
            "Dậu (17:00-19:00)",
        )

    def test_six_hours_every_day(self):
        start = jd_from_date(1, 1, 2024)
        for jd in range(start, start + 12):
            assert len(auspicious_hours(jd)) == 6


class TestDayInfo:
    def test_auspicious_fields_tet_2024(self):
        info = day_info(SolarDate(10, 2, 2024))
        assert info.day_star == "Kim Quỹ"
        assert info.is_hoang_dao is True
        assert info.day_officer == "Trực Mãn"
        assert info.day_officer_rating == "Trung bình"
        assert info.auspicious_hours == (
            "Dần (03:00-05:00)",
            "Thìn (07:00-09:00)",
            "Tỵ (09:00-11:00)",
            "Thân (15:00-17:00)",
            "Dậu (17:00-19:00)",
            "Hợi (21:00-23:00)",
        )

    def test_hac_dao_day(self):
        """12 Feb 2024, a Ngọ day of month 1, falls on Bạch Hổ."""
        info = day_info(SolarDate(12, 2, 2024))
        assert info.lunar == LunarDate(3, 1, 2024)
        assert (info.day_star, info.is_hoang_dao) == ("Bạch Hổ", False)

    def test_new_year_2024(self):
        info = day_info(SolarDate(1, 1, 2024))
        assert info.lunar == LunarDate(20, 11, 2023)
        assert info.jd == 2460311
        assert info.weekday == 0
        assert info.can_chi_day == "Giáp Tý"
        assert info.can_chi_year == "Quý Mão"
        assert info.solar_term == "Đông Chí"

    def test_tet_2024(self):
        info = day_info(SolarDate(10, 2, 2024))
        assert info.lunar == LunarDate(1, 1, 2024)
        assert info.can_chi_month == "Bính Dần"
        assert info.solar_term == "Lập Xuân"

    def test_summer_term(self):
        assert day_info(SolarDate(1, 7, 2024)).solar_term == "Hạ Chí"

    def test_solar_terms_count(self):
        assert len(SOLAR_TERMS) == 24

    def test_invalid_date(self):
        with pytest.raises(InvalidDateError):
            day_info(SolarDate(31, 2, 2024))


class TestMonthView:
    def test_february_2024(self):
        view = month_view(2024, 2)
        assert len(view.cells) == 29
        assert view.leading_blanks == 4  # 1 Feb 2024 is a Thursday
        tet = view.cells[9]
        assert tet.solar_day == 10
        assert (tet.lunar_day, tet.lunar_month, tet.is_month_start) == (1, 1, True)

    def test_month_starts_marked(self):
        view = month_view(2023, 3)
        starts = [c for c in view.cells if c.is_month_start]
        assert [c.solar_day for c in starts] == [22]
        assert starts[0].is_leap_month

    def test_october_1582_gap(self):
        """The Gregorian reform dropped 5..14 Oct 1582."""
        view = month_view(1582, 10)
        assert len(view.cells) == 21
        assert [c.solar_day for c in view.cells[3:5]] == [4, 15]
        assert view.leading_blanks == 1  # 1 Oct 1582 was a Monday

    def test_may_2054_has_no_day_zero(self):
        view = month_view(2054, 5)
        assert all(1 <= c.lunar_day <= 30 for c in view.cells)
        assert [c.solar_day for c in view.cells if c.is_month_start] == [8]

    def test_invalid_month(self):
        with pytest.raises(InvalidDateError):
            month_view(2024, 13)


class TestZoneOffset:
    def test_vietnam(self):
        assert zone_offset_hours("Asia/Ho_Chi_Minh", SolarDate(1, 1, 2024)) == 7.0

    def test_china(self):
        assert zone_offset_hours("Asia/Shanghai", SolarDate(1, 1, 2024)) == 8.0

    def test_daylight_saving(self):
        assert zone_offset_hours("Europe/Paris", SolarDate(1, 7, 2024)) == 2.0
        assert zone_offset_hours("Europe/Paris", SolarDate(1, 1, 2024)) == 1.0

    def test_unknown_zone(self):
        with pytest.raises(TimezoneError):
            zone_offset_hours("Mars/Olympus_Mons", SolarDate(1, 1, 2024))


class TestRun:
    def test_default_zone(self):
        info = run(QueryInput(when="2024-02-10"))
        assert info.time_zone == 7.0
        assert info.lunar == LunarDate(1, 1, 2024)

    def test_china_zone(self):
        info = run(QueryInput(when="2007-02-17", zone="Asia/Shanghai"))
        assert info.time_zone == 8.0
        assert info.lunar == LunarDate(30, 12, 2006)

    @pytest.mark.parametrize("when", ["2024-02-30", "10/02/2024", ""])
    def test_bad_date_string(self, when):
        with pytest.raises(InvalidDateError):
            run(QueryInput(when=when))

    def test_bad_zone(self):
        with pytest.raises(TimezoneError):
            run(QueryInput(when="2024-02-10", zone="Nowhere/City"))
