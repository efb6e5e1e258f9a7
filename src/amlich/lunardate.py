"""CLI entry point for a single solar-to-lunar lookup.

Run with an optional ISO date and zone name:
    uv run python -m amlich.lunardate 2024-02-10 Asia/Ho_Chi_Minh
"""

import datetime
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from amlich.almanac import format_long, format_lunar_date, run  # noqa: E402
from amlich.models import QueryInput  # noqa: E402


def main(argv: list[str]) -> None:
    logging.basicConfig(level=os.environ.get("AMLICH_LOG_LEVEL", "WARNING").upper())
    when = argv[0] if argv else datetime.date.today().isoformat()
    zone = argv[1] if len(argv) > 1 else os.environ.get("AMLICH_TIMEZONE", "Asia/Ho_Chi_Minh")

    info = run(QueryInput(when=when, zone=zone))
    print(f"{when} ({zone}, UTC{info.time_zone:+g})")
    print(f"  {format_lunar_date(info.lunar)}")
    print(f"  {format_long(info.lunar)}")
    print(f"  Can chi: {info.can_chi_day} / {info.can_chi_month} / {info.can_chi_year}")
    print(f"  Tiết khí: {info.solar_term}")
    quality = "Hoàng Đạo" if info.is_hoang_dao else "Hắc Đạo"
    print(f"  Ngày {info.day_star} {quality}, {info.day_officer}")
    print(f"  Giờ hoàng đạo: {', '.join(info.auspicious_hours)}")


def cli() -> None:
    main(sys.argv[1:])


if __name__ == "__main__":
    cli()
