"""Discussion page - feed, post detail and comments"""

import streamlit as st
import sys
import os

# Add parent directory to path to import plan2read
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from plan2read.discussion import DEFAULT_CATEGORIES
from plan2read.errors import PlannerError


def show_discussion_page(client):
    """Display the discussion board

    Args:
        client: PlannerClient from session state
    """
    st.title("💬 Discussion")
    board = client.discussion

    if board.current_post is not None:
        _show_post_detail(board)
        return

    _show_new_post_form(board)

    try:
        posts = board.load_posts()
    except PlannerError as e:
        st.error(f"Error loading posts: {e}")
        return

    if not posts:
        st.info("No posts yet.")
        return

    for post in posts:
        with st.container(border=True):
            when = post.created_at.strftime("%d %b %Y %H:%M") if post.created_at else ""
            st.caption(f"🏷️ {post.category}  ·  {when}")
            st.markdown(f"### {post.title}")
            st.write(post.content[:200] + ("..." if len(post.content) > 200 else ""))
            if st.button("Read & comment", key=f"view_{post.id}"):
                try:
                    board.open_post(post.id)
                except PlannerError as e:
                    st.error(f"Error loading comments: {e}")
                st.rerun()


def _show_new_post_form(board):
    with st.expander("✏️ New post"):
        with st.form("new_post_form", clear_on_submit=True):
            title = st.text_input("Title")
            category = st.selectbox("Category", options=DEFAULT_CATEGORIES)
            content = st.text_area("Content")
            submitted = st.form_submit_button("Post", type="primary")

        if submitted:
            try:
                board.create_post(title, content, category)
                st.success("Posted!")
            except PlannerError as e:
                st.error(f"Post error: {e}")


def _show_post_detail(board):
    post = board.current_post
    if st.button("← Back to feed"):
        board.close_post()
        st.rerun()

    st.markdown(f"## {post.title}")
    st.caption(f"🏷️ {post.category}  ·  by {post.user_id or 'Anonymous'}")
    st.write(post.content)
    st.divider()

    st.subheader(f"Comments ({len(board.comments)})")
    if not board.comments:
        st.caption("No comments yet. Be the first!")
    for c in board.comments:
        st.markdown(f"**{c.user_id or 'Anonymous'}**")
        st.write(c.content)

    with st.form("comment_form", clear_on_submit=True):
        content = st.text_input("Write a comment")
        submitted = st.form_submit_button("Send")

    if submitted:
        try:
            board.submit_comment(content)
            st.rerun()
        except PlannerError as e:
            st.error(f"Comment error: {e}")
