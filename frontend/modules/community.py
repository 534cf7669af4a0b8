"""Community page - browse and copy shared schedules"""

import streamlit as st
import sys
import os

# Add parent directory to path to import plan2read
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from plan2read.community import default_copy_name
from plan2read.errors import PlannerError


def show_community_page(client):
    """Display all public schedules with a copy action

    Args:
        client: PlannerClient from session state
    """
    st.title("🌐 Community Schedules")

    try:
        shared = client.community.list_community()
    except PlannerError as e:
        st.error(f"Error loading community: {e}")
        return

    if not shared:
        st.info("No shared schedules yet.")
        return

    for schedule in shared:
        with st.container(border=True):
            col_info, col_copy = st.columns([4, 2])
            with col_info:
                st.markdown(f"### {schedule.name}")
                st.caption(f"By user {schedule.owner_id[:4]}...")
            with col_copy:
                new_name = st.text_input(
                    "Name for your copy",
                    value=default_copy_name(schedule.name),
                    key=f"copy_name_{schedule.id}"
                )
                if st.button("Use this schedule", key=f"copy_{schedule.id}"):
                    try:
                        client.community.copy_schedule(schedule.id, new_name)
                        st.success("Copied to your schedules!")
                    except PlannerError as e:
                        st.error(f"Copy error: {e}")
