"""Salah Times — Streamlit app for the prayer times of a place and day."""

import datetime
import logging
from dataclasses import replace

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from salahtimes.compute import GeocodingError, run  # noqa: E402
from salahtimes.config import ConfigError, load_config  # noqa: E402
from salahtimes.display import (  # noqa: E402
    format_bearing,
    format_clock,
    localize,
    timetable_rows,
)
from salahtimes.errors import PrayerTimesError  # noqa: E402
from salahtimes.i18n import t  # noqa: E402
from salahtimes.methods import CalculationMethod  # noqa: E402
from salahtimes.models import Madhab, QueryInput  # noqa: E402
from salahtimes.prayers import next_prayer, now_utc  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# --- Language detection (browser-first via streamlit-js-eval) ---
# First run returns None; the rerun triggered by streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☪",
    layout="centered",
)

# --- Session state initialization ---

if "report" not in st.session_state:
    st.session_state.report = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

try:
    _config = load_config()
except ConfigError as e:
    logger.error("Invalid configuration: %s", e)
    st.error(str(e))
    st.stop()

_METHODS = list(CalculationMethod)
_MADHABS = list(Madhab)

st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    </style>
    """,
    unsafe_allow_html=True,
)

st.title(t("page_title", _lang))

# --- Input panel ---
with st.form("query"):
    address = st.text_input(t("label_place", _lang), value="Raleigh, NC")
    date_val = st.date_input(
        t("label_date", _lang),
        value=datetime.date.today(),
        min_value=datetime.date(1, 1, 1),
        max_value=datetime.date(9999, 12, 31),
    )
    col1, col2 = st.columns(2)
    with col1:
        method = st.selectbox(
            t("label_method", _lang),
            _METHODS,
            index=_METHODS.index(_config.method),
            format_func=lambda m: m.value.replace("_", " ").title(),
        )
    with col2:
        madhab = st.selectbox(
            t("label_madhab", _lang),
            _MADHABS,
            index=_MADHABS.index(_config.madhab),
            format_func=lambda m: m.value.title(),
        )
    submitted = st.form_submit_button(t("btn_show_times", _lang), use_container_width=True)

if submitted and address.strip():
    when_str = date_val.strftime("%Y-%m-%d")
    config = replace(_config, method=method, madhab=madhab)
    with st.spinner(t("loading_compute", _lang)):
        try:
            st.session_state.report = run(QueryInput(address=address, when=when_str), config)
            st.session_state.error_msg = None
        except GeocodingError as e:
            st.session_state.report = None
            st.session_state.error_msg = t("error_address", _lang).format(error=e)
        except PrayerTimesError as e:
            logger.info("No schedule for %r on %s: %s", address, when_str, e)
            st.session_state.report = None
            st.session_state.error_msg = t("error_no_schedule", _lang).format(error=e)

if st.session_state.error_msg:
    st.error(st.session_state.error_msg)

report = st.session_state.report
if report is None:
    if not st.session_state.error_msg:
        st.caption(t("placeholder", _lang))
    st.stop()

st.subheader(report.context.address_display)
st.caption(f"{report.context.day.to_date().isoformat()} · {report.context.timezone_name}")

_rows = timetable_rows(report, _lang)
st.table({"": [label for label, _ in _rows], " ": [value for _, value in _rows]})

col1, col2 = st.columns(2)
with col1:
    try:
        upcoming = next_prayer(report.schedule, now_utc())
    except PrayerTimesError as e:
        logger.info("No next prayer: %s", e)
    else:
        st.metric(
            t("next_prayer", _lang),
            f"{t(upcoming.prayer.value, _lang)} "
            f"{format_clock(localize(upcoming.time, report.context.timezone_name))}",
        )
with col2:
    st.metric(t("qibla", _lang), format_bearing(report.qibla))
