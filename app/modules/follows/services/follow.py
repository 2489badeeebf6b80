from typing import List
import logging

from sqlalchemy.orm import Session

from app.core.errors import InvalidOperationError
from app.core.toggle import toggle_membership
from app.modules.follows.schemas.follow import FollowToggle
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import require_user, save_user

logger = logging.getLogger(__name__)

def write_follow_edge(db: Session, actor: User, following: List[str], target: User, delta: int) -> None:
    """
    Persist both sides of a follow edge: actor first, then target.

    The two saves are independent writes. If the target save fails the actor
    keeps its new following list while the counter stays stale; the failure
    propagates and nothing is rolled back.
    """
    actor.following = following
    save_user(db, actor)

    # Read after the actor commit so the counter is adjusted from its stored value
    target.followers = max((target.followers or 0) + delta, 0)
    save_user(db, target)

def toggle_follow(db: Session, actor_id: str, target_id: str) -> FollowToggle:
    """Follow the target if not followed yet, unfollow otherwise"""
    if actor_id == target_id:
        raise InvalidOperationError("User cannot follow themselves")

    actor = require_user(db, actor_id)
    target = require_user(db, target_id, message="User to follow not found")

    result = toggle_membership(actor.following, target_id)
    delta = 1 if result.was_added else -1
    write_follow_edge(db, actor, result.members, target, delta)

    logger.info(f"{actor_id} {'followed' if result.was_added else 'unfollowed'} {target_id}")
    return FollowToggle(following=result.was_added)
