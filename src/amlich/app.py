"""Lịch vạn niên — Streamlit app showing the Vietnamese lunar date of any solar date."""

import datetime
import html
import logging
import os

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from amlich.almanac import format_lunar_date, format_long, month_view, run  # noqa: E402
from amlich.compute import InvalidDateError, TimezoneError  # noqa: E402
from amlich.i18n import t, weekday_name  # noqa: E402
from amlich.models import QueryInput  # noqa: E402
from amlich.renderers.month_grid import render_month_html  # noqa: E402

logging.basicConfig(level=os.environ.get("AMLICH_LOG_LEVEL", "WARNING").upper())

_DEFAULT_ZONE = os.environ.get("AMLICH_TIMEZONE", "Asia/Ho_Chi_Minh")

_ZONES: list[str] = [
    "Asia/Ho_Chi_Minh",
    "Asia/Shanghai",
    "Asia/Seoul",
    "Asia/Tokyo",
    "Europe/Paris",
    "America/Los_Angeles",
]
if _DEFAULT_ZONE not in _ZONES:
    _ZONES.insert(0, _DEFAULT_ZONE)

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "vi" if _browser_lang.lower().startswith("vi") else "en"

_lang: str = st.session_state.get("lang", "vi")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☾",
    layout="centered",
)

# --- Session state initialization ---
if "view_date" not in st.session_state:
    st.session_state.view_date = datetime.date.today()
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    .lunar-header {
        background: linear-gradient(to right, #ea580c, #dc2626);
        border-radius: 24px;
        padding: 1.5rem;
        color: #ffffff;
        text-align: center;
        margin-bottom: 1rem;
    }
    .lunar-header .big { font-size: 4rem; font-weight: 900; line-height: 1.1; }
    .lunar-header .pill {
        display: inline-block;
        background: rgba(255,255,255,0.12);
        border-radius: 16px;
        padding: 0.6rem 1rem;
        font-weight: 700;
    }
    .error-box {
        border: 1px solid #ff6b6b;
        color: #b91c1c;
        border-radius: 12px;
        padding: 0.8rem 1.2rem;
    }
    .footer-quote { color: #9ca3af; font-style: italic; text-align: center; font-size: 0.8rem; }
    </style>
    """,
    unsafe_allow_html=True,
)


def _shift_month(day: datetime.date, delta: int) -> datetime.date:
    index = day.year * 12 + day.month - 1 + delta
    if not datetime.MINYEAR <= index // 12 <= datetime.MAXYEAR:
        return day
    return datetime.date(index // 12, index % 12 + 1, 1)


# --- Inputs ---
col1, col2 = st.columns([3, 2])
with col1:
    date_val = st.date_input(
        t("label_date", _lang),
        value=st.session_state.view_date,
        min_value=datetime.date(1, 1, 1),
        max_value=datetime.date(9999, 12, 31),
    )
with col2:
    zone = st.selectbox(t("label_zone", _lang), _ZONES, index=_ZONES.index(_DEFAULT_ZONE))

if date_val != st.session_state.view_date:
    st.session_state.view_date = date_val

nav1, nav2, nav3 = st.columns(3)
with nav1:
    if st.button(t("btn_prev_month", _lang), use_container_width=True):
        st.session_state.view_date = _shift_month(st.session_state.view_date, -1)
        st.rerun()
with nav2:
    if st.button(t("btn_today", _lang), use_container_width=True):
        st.session_state.view_date = datetime.date.today()
        st.rerun()
with nav3:
    if st.button(t("btn_next_month", _lang), use_container_width=True):
        st.session_state.view_date = _shift_month(st.session_state.view_date, 1)
        st.rerun()

view_date: datetime.date = st.session_state.view_date
st.session_state.error_msg = None

try:
    info = run(QueryInput(when=view_date.isoformat(), zone=zone))
except InvalidDateError as e:
    info = None
    st.session_state.error_msg = t("error_date", _lang).format(error=html.escape(str(e)))
except TimezoneError as e:
    info = None
    st.session_state.error_msg = t("error_zone", _lang).format(error=html.escape(str(e)))

# --- Day header ---
if info is not None:
    solar_line = t("solar_date", _lang).format(
        weekday=weekday_name(info.weekday, _lang),
        day=info.solar.day,
        month=info.solar.month,
        year=info.solar.year,
    )
    can_chi_line = t("can_chi_line", _lang).format(
        day=info.can_chi_day, month=info.can_chi_month, year=info.can_chi_year
    )
    st.markdown(
        f"<div class='lunar-header'>"
        f"<div>{html.escape(solar_line)}</div>"
        f"<div class='big'>{info.solar.day}</div>"
        f"<div class='pill'>{t('label_lunar', _lang)}: "
        f"{html.escape(format_lunar_date(info.lunar, _lang))}</div>"
        f"<div style='margin-top:0.6rem'>{html.escape(format_long(info.lunar))}</div>"
        f"<div>{t('label_can_chi', _lang)}: {html.escape(can_chi_line)}</div>"
        f"<div>{t('label_solar_term', _lang)}: {html.escape(info.solar_term)}"
        f" · UTC{info.time_zone:+g}</div>"
        f"<div>{t('label_day_quality', _lang)}: {html.escape(info.day_star)} "
        f"{t('hoang_dao' if info.is_hoang_dao else 'hac_dao', _lang)}"
        f" · {html.escape(info.day_officer)} ({html.escape(info.day_officer_rating)})</div>"
        f"<div>{t('label_auspicious_hours', _lang)}: "
        f"{html.escape(', '.join(info.auspicious_hours))}</div>"
        f"</div>",
        unsafe_allow_html=True,
    )

    view = month_view(view_date.year, view_date.month, info.time_zone)
    components.html(
        render_month_html(view, selected_day=view_date.day, lang=_lang),
        height=420,
        scrolling=False,
    )

# --- Error message ---
if st.session_state.error_msg:
    st.markdown(
        f"<div class='error-box'>{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )

st.markdown(
    f"<p class='footer-quote'>&quot;{html.escape(t('footer_quote', _lang))}&quot;</p>",
    unsafe_allow_html=True,
)
