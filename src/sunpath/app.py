"""SunPath — Streamlit app for the sun path and shadows at a place and time."""

import datetime
import html
import logging
import os

import httpx
import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from sunpath.clock import format_time  # noqa: E402
from sunpath.compute import (  # noqa: E402
    DEFAULT_HOUSE,
    GeocodingError,
    compute_sun_path,
    geocode_address,
)
from sunpath.models import QueryInput  # noqa: E402
from sunpath.overlay import sun_position_to_latlng, trajectory_overlay  # noqa: E402
from sunpath.renderers.plotly_2d import render_plotly_chart  # noqa: E402
from sunpath.renderers.static import render_static_chart  # noqa: E402
from sunpath.seasons import SeasonalTrajectoryCache  # noqa: E402
from sunpath.shadow import point_shadow  # noqa: E402

logging.basicConfig(level=os.environ.get("SUNPATH_LOG_LEVEL", "WARNING"))

st.set_page_config(
    page_title="SunPath",
    page_icon="☀",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0d1b35 !important;
        color: #d0d8e8;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .overlay-box {
        border-top: 1px solid rgba(201,169,110,0.18);
        padding: 1.2rem 1.6rem;
        color: #e8e8e8;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Session state initialization ---
if "context" not in st.session_state:
    st.session_state.context = None
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None
if "seasonal_cache" not in st.session_state:
    st.session_state.seasonal_cache = SeasonalTrajectoryCache()

# --- Input bar ---
col1, col2, col3, col4, col5 = st.columns([3, 2, 2, 2, 1.5])
with col1:
    address = st.text_input("Location", value="Eiffel Tower, Paris")
with col2:
    date_val = st.date_input("Date", value=datetime.date(2024, 6, 21))
with col3:
    time_val = st.time_input("Time (longitude clock)", value=datetime.time(15, 0), step=900)
with col4:
    rotation = st.slider("House rotation", min_value=0, max_value=359, value=0)
with col5:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    submitted = st.button("☀ Show", use_container_width=True)

# --- Form submission handler ---
if submitted and address:
    query = QueryInput(
        address=address,
        when=f"{date_val.strftime('%Y-%m-%d')} {time_val.strftime('%H:%M')}",
    )
    st.session_state.error_msg = None
    with st.spinner("Looking up the address..."):
        try:
            st.session_state.context = geocode_address(query.address, query.when)
        except GeocodingError as e:
            st.session_state.error_msg = f"Address not found. ({html.escape(str(e))})"
        except httpx.HTTPError as e:
            st.session_state.error_msg = f"Geocoding service unavailable. ({html.escape(str(e))})"

# --- Error message ---
if st.session_state.error_msg:
    st.markdown(
        f"<div class='overlay-box' style='color:#ff9999;'>{st.session_state.error_msg}</div>",
        unsafe_allow_html=True,
    )

# --- Charts ---
context = st.session_state.context
if context is None:
    st.markdown(
        "<div style='height:60vh; display:flex; align-items:center; justify-content:center;"
        " color:#334466; font-size:1.2rem;'>Enter a location and date to see the sun path</div>",
        unsafe_allow_html=True,
    )
    st.stop()

data = compute_sun_path(
    context,
    house=DEFAULT_HOUSE,
    house_rotation_deg=float(rotation),
    cache=st.session_state.seasonal_cache,
)
lng = context.coord.lng

chart_col, plan_col = st.columns(2)
with chart_col:
    st.plotly_chart(render_plotly_chart(data), use_container_width=True)
with plan_col:
    plan_fig = render_static_chart(data)
    st.pyplot(plan_fig)
    plt.close(plan_fig)

# --- Sun path projected on the map around the location ---
overlay = trajectory_overlay(data.trajectory, context.coord)
map_points = [
    {"lat": p.lat, "lon": p.lng, "color": "#ffb300", "size": 8} for p in overlay.path
]
if data.position.above_horizon:
    sun = sun_position_to_latlng(data.position, context.coord)
    map_points.append({"lat": sun.lat, "lon": sun.lng, "color": "#ffeb3b", "size": 40})
map_points.append(
    {"lat": context.coord.lat, "lon": context.coord.lng, "color": "#c9a96e", "size": 20}
)
st.map(pd.DataFrame(map_points), latitude="lat", longitude="lon", color="color", size="size")

shadow = point_shadow(data.position)
shadow_text = "no shadow (sun down)" if shadow.length == float("inf") else (
    f"{shadow.length:.2f} m per metre of height toward {shadow.direction_deg:.0f}°"
)
st.markdown(
    "<div class='overlay-box'>"
    f"{html.escape(context.address_display)}<br>"
    f"Sunrise {format_time(data.times.sunrise, lng)} · "
    f"Solar noon {format_time(data.times.solar_noon, lng)} · "
    f"Sunset {format_time(data.times.sunset, lng)}<br>"
    f"Shadow: {shadow_text}<br>"
    f"Recommended facing: {data.orientation.angle_deg:.0f}° ({data.orientation.compass_label})"
    "</div>",
    unsafe_allow_html=True,
)
if data.trajectory.degraded:
    st.caption(f"No daylight path: {data.trajectory.reason}")
if data.seasonal is None:
    st.caption("No seasonal data available.")
