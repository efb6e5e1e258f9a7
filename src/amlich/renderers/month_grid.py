"""HTML month-grid renderer.

Produces a self-contained HTML string (CSS grid, no JS) for embedding via
st.components.v1.html(). Each cell shows the solar day large and the lunar
day small; the first day of a lunar month shows "D/M" instead, in the
accent color, with a trailing "n" when the month is a leap month.
"""

from __future__ import annotations

import datetime
import html

from amlich.i18n import WEEK_HEADER, t
from amlich.models import CalendarCell, MonthView

_BG = "#ffffff"
_ACCENT = "#dc2626"
_MUTED = "#9ca3af"
_SELECTED_BG = "#dc2626"
_TODAY_RING = "#fecaca"


def _lunar_label(cell: CalendarCell) -> str:
    if not cell.is_month_start:
        return str(cell.lunar_day)
    label = f"{cell.lunar_day}/{cell.lunar_month}"
    if cell.is_leap_month:
        label += "n"
    return label


def render_month_html(
    view: MonthView,
    selected_day: int | None = None,
    lang: str = "vi",
    today: datetime.date | None = None,
) -> str:
    """Return a self-contained HTML page with the month grid.

    Args:
        view: Month layout with lunar annotations.
        selected_day: Solar day to highlight, if any.
        lang: Language code ('vi' or 'en') for headers.
        today: Date to mark with a ring; defaults to the current date.

    Returns:
        HTML string suitable for st.components.v1.html().
    """
    today = today or datetime.date.today()
    header = WEEK_HEADER.get(lang, WEEK_HEADER["vi"])

    head_parts = [
        f'<span class="dow{" sun" if i == 0 else ""}">{html.escape(name)}</span>'
        for i, name in enumerate(header)
    ]
    cell_parts = ['<div class="cell blank"></div>'] * view.leading_blanks
    for cell in view.cells:
        classes = ["cell"]
        if cell.solar_day == selected_day:
            classes.append("selected")
        if (view.year, view.month, cell.solar_day) == (today.year, today.month, today.day):
            classes.append("today")
        if cell.is_month_start:
            classes.append("month-start")
        cell_parts.append(
            f'<div class="{" ".join(classes)}">'
            f'<span class="solar">{cell.solar_day}</span>'
            f'<span class="lunar">{_lunar_label(cell)}</span>'
            f"</div>"
        )

    title = t("month_title", lang).format(month=view.month, year=view.year)
    head_html = "\n    ".join(head_parts)
    cells_html = "\n    ".join(cell_parts)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
body {{
    background: {_BG};
    font-family: 'Be Vietnam Pro', 'Segoe UI', sans-serif;
    padding: 0.5rem;
}}
h4 {{
    text-align: center;
    color: #374151;
    text-transform: uppercase;
    letter-spacing: 0.05em;
    margin-bottom: 0.8rem;
}}
.grid {{
    display: grid;
    grid-template-columns: repeat(7, 1fr);
    gap: 4px;
    text-align: center;
}}
.dow {{ font-size: 11px; font-weight: 700; color: {_MUTED}; }}
.dow.sun {{ color: {_ACCENT}; }}
.cell {{
    height: 3rem;
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
    border-radius: 12px;
}}
.cell .solar {{ font-size: 14px; font-weight: 700; color: #111827; }}
.cell .lunar {{ font-size: 11px; color: {_MUTED}; margin-top: 2px; }}
.cell.month-start .lunar {{ color: {_ACCENT}; font-weight: 700; }}
.cell.today {{ box-shadow: 0 0 0 2px {_TODAY_RING}; }}
.cell.selected {{ background: {_SELECTED_BG}; }}
.cell.selected .solar, .cell.selected .lunar {{ color: #ffffff; }}
</style>
</head>
<body>
<h4>{html.escape(title)}</h4>
<div class="grid">
    {head_html}
    {cells_html}
</div>
</body>
</html>"""
