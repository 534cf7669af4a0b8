import logging
from datetime import datetime
from typing import List, Optional

from plan2read.errors import ValidationError
from plan2read.gateway import RemoteStoreGateway
from plan2read.identity import new_id
from plan2read.schemas import Comment, Post

logger = logging.getLogger(__name__)

# Categories the UI offers; the backend accepts any label
DEFAULT_CATEGORIES = ["General", "Study Tips", "Exam Prep", "Q&A", "Motivation"]


def _timestamp(value: Optional[datetime]) -> float:
    # Rows without a timestamp sort as oldest
    return value.timestamp() if value else float("-inf")


class DiscussionBoard:
    """
    Posts of the discussion feed and comments of the open post.

    Creating a post or comment never inserts it locally; the affected list is
    always reloaded from the backend afterwards, whether the create worked or not.
    """

    def __init__(self, gateway: RemoteStoreGateway, author: str = "Anonymous"):
        self.gateway = gateway
        self.author = author
        self.posts: List[Post] = []
        self.current_post: Optional[Post] = None
        self.comments: List[Comment] = []

    def load_posts(self) -> List[Post]:
        """Fetch the feed, newest first"""
        posts = self.gateway.get_discussions()
        self.posts = sorted(posts, key=lambda p: _timestamp(p.created_at), reverse=True)
        return self.posts

    def open_post(self, post_id: str) -> Optional[Post]:
        """Show one cached post with its comments; unknown IDs are ignored"""
        post = next((p for p in self.posts if p.id == str(post_id)), None)
        if post is None:
            return None
        self.current_post = post
        self.load_comments(post.id)
        return post

    def close_post(self):
        self.current_post = None
        self.comments = []

    def load_comments(self, post_id: str) -> List[Comment]:
        """Fetch comments of one post, oldest first"""
        rows = self.gateway.get_comments(str(post_id))
        matching = [c for c in rows if c.post_id == str(post_id)]
        self.comments = sorted(matching, key=lambda c: _timestamp(c.created_at))
        return self.comments

    def create_post(self, title: str, content: str, category: str = "General") -> str:
        title = (title or "").strip()
        content = (content or "").strip()
        if not title or not content:
            raise ValidationError("Title and content are required")

        post_id = new_id()
        try:
            self.gateway.create_post(post_id, category, title, content, user_id=self.author)
        finally:
            self.load_posts()
        return post_id

    def submit_comment(self, content: str) -> str:
        if self.current_post is None:
            raise ValidationError("No post is open")
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment cannot be empty")

        comment_id = new_id()
        post_id = self.current_post.id
        try:
            self.gateway.add_comment(comment_id, post_id, content, user_id=self.author)
        finally:
            self.load_comments(post_id)
        return comment_id
