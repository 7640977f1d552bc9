from __future__ import annotations

from sqlalchemy.orm import Session

from devconnector.models.post import Post
from devconnector.models.user import User


def create_post(db: Session, author: User, text: str) -> Post:
    post = Post(user_id=author.id, text=text, name=author.name, avatar=author.avatar)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


def list_posts(db: Session) -> list[Post]:
    return db.query(Post).order_by(Post.created_at.desc(), Post.id.desc()).all()
