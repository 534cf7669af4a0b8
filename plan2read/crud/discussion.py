from sqlalchemy.orm import Session
from plan2read.models import Discussion, Comment
from plan2read.models.clock import utcnow
from plan2read.schemas import PostCreate, CommentCreate
from typing import List

def get_discussions(db: Session) -> List[Discussion]:
    """Get all posts in storage order"""
    return db.query(Discussion).order_by(Discussion.row_id).all()

def create_post(db: Session, post: PostCreate) -> Discussion:
    """Append a post; anonymous posts are attributed to "guest" """
    db_post = Discussion(
        post_id=post.post_id,
        user_id=post.user_id or "guest",
        category=post.category,
        title=post.title,
        content=post.content,
        created_at=utcnow()
    )
    db.add(db_post)
    db.commit()
    db.refresh(db_post)
    return db_post

def get_comments(db: Session, post_id: str) -> List[Comment]:
    """Get comments of one post in storage order"""
    return db.query(Comment).filter(
        Comment.post_id == post_id
    ).order_by(Comment.row_id).all()

def add_comment(db: Session, comment: CommentCreate) -> Comment:
    """Append a comment"""
    db_comment = Comment(
        comment_id=comment.comment_id,
        post_id=comment.post_id,
        user_id=comment.user_id or "guest",
        content=comment.content,
        created_at=utcnow()
    )
    db.add(db_comment)
    db.commit()
    db.refresh(db_comment)
    return db_comment
