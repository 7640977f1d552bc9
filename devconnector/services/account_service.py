# account_service.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from devconnector.models.post import Post
from devconnector.models.profile import Profile
from devconnector.models.user import User


logger = logging.getLogger(__name__)


def _delete_posts(db: Session, user_id: int) -> int:
    return db.query(Post).filter(Post.user_id == user_id).delete(synchronize_session=False)


def _delete_profile(db: Session, user_id: int) -> int:
    return db.query(Profile).filter(Profile.user_id == user_id).delete(synchronize_session=False)


def _delete_user(db: Session, user_id: int) -> int:
    return db.query(User).filter(User.id == user_id).delete(synchronize_session=False)


# Order matters: nothing may reference the user row once it is gone.
_CASCADE_STEPS = (
    ("posts", _delete_posts),
    ("profile", _delete_profile),
    ("user", _delete_user),
)


def delete_account(db: Session, user_id: int) -> None:
    """Remove a user's posts, profile and user record, in that order.

    Each step commits on its own. When a step fails the remaining steps are
    skipped and the error propagates; completed steps are not rolled back, so a
    failure can leave posts or a profile without an owner.
    """
    for step, remove in _CASCADE_STEPS:
        try:
            removed = remove(db, user_id)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("account.delete failed at step=%s user_id=%s", step, user_id)
            raise
        logger.info("account.delete step=%s user_id=%s removed=%s", step, user_id, removed)


def find_orphans(db: Session) -> dict[str, list[int]]:
    """Ids of posts and profiles whose owning user no longer exists."""
    user_ids = select(User.id)
    posts = db.query(Post.id).filter(~Post.user_id.in_(user_ids)).order_by(Post.id).all()
    profiles = db.query(Profile.id).filter(~Profile.user_id.in_(user_ids)).order_by(Profile.id).all()
    return {
        "posts": [row.id for row in posts],
        "profiles": [row.id for row in profiles],
    }


def purge_orphans(db: Session) -> dict[str, int]:
    """Delete the records ``find_orphans`` reports, left behind by an interrupted account delete."""
    orphans = find_orphans(db)
    removed = {"posts": 0, "profiles": 0}
    if orphans["posts"]:
        removed["posts"] = db.query(Post).filter(Post.id.in_(orphans["posts"])).delete(synchronize_session=False)
    if orphans["profiles"]:
        removed["profiles"] = (
            db.query(Profile).filter(Profile.id.in_(orphans["profiles"])).delete(synchronize_session=False)
        )
    db.commit()
    logger.info("account.purge_orphans removed=%s", removed)
    return removed
