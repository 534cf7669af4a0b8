"""Plan2Read - Main application file"""

import streamlit as st
import sys
import os

# Add parent directory to path to import plan2read
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from plan2read.client import create_client
from plan2read.logging_handler import setup_logger

# Import page modules
from modules.planner import show_planner_page
from modules.community import show_community_page
from modules.discussion import show_discussion_page

setup_logger(console=False)

# ===================================================================
# PAGE CONFIGURATION & SESSION STATE
# ===================================================================

st.set_page_config(
    page_title="Plan2Read",
    page_icon="📚",
    layout="wide"
)

# One client per browser session; it owns the planner, community and discussion caches
if 'client' not in st.session_state:
    st.session_state.client = create_client()

client = st.session_state.client

# ===================================================================
# SIDEBAR NAVIGATION
# ===================================================================

st.sidebar.title("📚 Plan2Read")
st.sidebar.caption(f"User {client.user_id[:12]}...")

theme = client.prefs.theme
if st.sidebar.button("☀️ Light mode" if theme == "dark" else "🌙 Dark mode"):
    client.prefs.toggle_theme()
    st.rerun()
st.sidebar.divider()

page = st.sidebar.radio(
    "Navigate",
    ["📅 Planner", "🌐 Community", "💬 Discussion"]
)

# ===================================================================
# PAGE ROUTING
# ===================================================================

if page == "📅 Planner":
    show_planner_page(client)

elif page == "🌐 Community":
    show_community_page(client)

elif page == "💬 Discussion":
    show_discussion_page(client)

# ===================================================================
# FOOTER
# ===================================================================

st.sidebar.divider()
st.sidebar.caption("Plan2Read v1.0")
