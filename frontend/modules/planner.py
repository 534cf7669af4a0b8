"""Planner page - weekly grid, daily timeline and session editing"""

import streamlit as st
import sys
import os

# Add parent directory to path to import plan2read
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from plan2read.errors import PlannerError, PublishIncompleteError
from plan2read.timeutil import Weekday


def show_planner_page(client):
    """Display the planner for the current user

    Args:
        client: PlannerClient from session state
    """
    st.title("📅 Study Planner")
    repo = client.repository

    if 'planner_loaded' not in st.session_state:
        try:
            repo.open_planner()
            st.session_state.planner_loaded = True
        except PlannerError as e:
            st.error(f"Error loading schedules: {e}")
            return

    _show_schedule_selector(client)

    if repo.current_schedule is None:
        st.info("Create your first schedule to get started.")
        return

    if repo.selected_day is None:
        _show_weekly_grid(repo)
    else:
        _show_daily_view(repo)


def _show_schedule_selector(client):
    """Schedule dropdown plus new / share / delete actions"""
    repo = client.repository
    col_select, col_new, col_share, col_delete = st.columns([3, 1, 1, 1])

    with col_select:
        if repo.schedules:
            ids = [s.id for s in repo.schedules]
            names = {s.id: s.name for s in repo.schedules}
            current_id = repo.current_schedule.id if repo.current_schedule else ids[0]
            selected = st.selectbox(
                "Schedule",
                options=ids,
                index=ids.index(current_id) if current_id in ids else 0,
                format_func=lambda i: names[i],
                label_visibility="collapsed"
            )
            if repo.current_schedule is None or selected != repo.current_schedule.id:
                try:
                    repo.load_schedule(selected)
                    st.rerun()
                except PlannerError as e:
                    st.error(f"Error loading schedule: {e}")
        else:
            st.caption("-- No Schedules --")

    with col_new:
        with st.popover("➕ New"):
            name = st.text_input("Name your new schedule", key="new_schedule_name")
            if st.button("Create", key="create_schedule"):
                try:
                    schedule_id = repo.create_schedule(name)
                    repo.load_schedule(schedule_id)
                    st.rerun()
                except PlannerError as e:
                    st.error(str(e))

    with col_share:
        if st.button("🌐 Share", disabled=repo.current_schedule is None):
            try:
                client.community.share_schedule()
                st.success("Schedule shared with the community!")
            except PublishIncompleteError as e:
                st.warning(f"{e} The shared copy ({e.schedule_id}) is empty.")
            except PlannerError as e:
                st.error(f"Share error: {e}")

    with col_delete:
        if st.button("🗑️ Delete", disabled=repo.current_schedule is None):
            try:
                repo.delete_schedule()
            except PlannerError as e:
                st.warning(str(e))


def _show_weekly_grid(repo):
    """One card per weekday with its session count"""
    st.markdown(f"### {repo.current_schedule.name}")
    counts = repo.session_counts()
    cols = st.columns(7)
    for col, day in zip(cols, Weekday):
        with col:
            st.metric(day.value, f"{counts[day]} subjects")
            if st.button("Open", key=f"open_{day.value}"):
                repo.select_day(day)
                st.rerun()


def _show_daily_view(repo):
    """Timeline of one day with add and delete"""
    day = repo.selected_day
    st.markdown(f"### 📅 {day.value}")
    if st.button("← Back to week"):
        repo.clear_day()
        st.rerun()

    sessions = repo.sessions_for_day(day)
    if not sessions:
        st.caption("No study sessions for this day yet.")

    for session in sessions:
        col_info, col_del = st.columns([5, 1])
        with col_info:
            st.markdown(f"**{session.subject}**")
            st.caption(f"{session.start_time} - {session.end_time}")
        with col_del:
            if st.button("Delete", key=f"del_{session.id}"):
                try:
                    repo.delete_session(session.id)
                    st.rerun()
                except PlannerError as e:
                    st.error(f"Error: {e}")
        st.divider()

    with st.form("add_session_form", clear_on_submit=True):
        st.subheader("Add Session")
        subject = st.text_input("Subject")
        col_start, col_end = st.columns(2)
        with col_start:
            start = st.time_input("Start", value=None, step=300)
        with col_end:
            end = st.time_input("End", value=None, step=300)
        submitted = st.form_submit_button("Save", type="primary")

    if submitted:
        try:
            repo.add_session(
                subject,
                start.strftime("%H:%M") if start else "",
                end.strftime("%H:%M") if end else ""
            )
            st.rerun()
        except PlannerError as e:
            st.error(str(e))
