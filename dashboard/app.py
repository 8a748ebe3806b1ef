"""
dashboard/app.py

A small Streamlit page that previews what the Lift Off device publishes.
- Loads the settings (LIFTOFF_CONFIG or the defaults)
- Fetches the latest and next launch, cached for the refresh interval
- Shows the rendered tile next to the attribute values
"""
from datetime import datetime, timezone

import streamlit as st
import streamlit.components.v1 as components

from liftoff import UpstreamError, build_attributes, build_source, load_settings
from liftoff.core.display import compute_switch_instant

# -------------------------
# Page config
# -------------------------
st.set_page_config(page_title="Lift Off", layout="wide")
st.title("🚀 Lift Off")

settings = load_settings()


# -------------------------
# Helpers: fetch launches
# -------------------------
@st.cache_data(show_spinner=True, ttl=settings.refresh_interval_minutes * 60)
def load_launches(source_name: str):
    source = build_source(settings)
    return source.fetch_latest_and_next(datetime.now(timezone.utc))


# -------------------------
# Sidebar
# -------------------------
st.sidebar.header("Settings")
st.sidebar.write(f"Source: `{settings.source}`")
st.sidebar.write(f"Time zone: `{settings.time_zone}`")
st.sidebar.write(f"Layout: `{settings.dashboard_layout.value}`")
if st.sidebar.button("Refresh now"):
    load_launches.clear()

try:
    latest, next_launch = load_launches(settings.source)
except UpstreamError as e:
    st.error(f"Could not reach the launch API: {e}")
    st.stop()

now = datetime.now(timezone.utc)
attributes = build_attributes(latest, next_launch, now, settings)

# -------------------------
# Tile + attributes
# -------------------------
col_tile, col_attrs = st.columns([1, 2])
with col_tile:
    st.subheader("Tile")
    components.html(attributes["tile"], height=400)

with col_attrs:
    st.subheader("Attributes")
    st.table(
        [{"attribute": k, "value": str(v)} for k, v in attributes.items() if k != "tile"]
    )

    switch_at = compute_switch_instant(latest, next_launch, now)
    if switch_at is not None:
        st.caption(f"Display switches to the next launch at {switch_at.astimezone(settings.tz):%c}")
