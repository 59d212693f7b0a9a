"""
Forum Routes - interview experiences

GET /forums - List posts with author names (newest first)
POST /forums - Create post
DELETE /forums/{post_id} - Delete post (admin only, moderation)
"""

from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from portal.core.auth import Identity, get_current_user, require_admin
from portal.db.database import get_db
from portal.models import ForumPost, User
from portal.schemas.schemas import ForumPostCreate, ForumPostResponse, MessageResponse

router = APIRouter(prefix="/forums", tags=["Forums"])
logger = structlog.get_logger(__name__)


def to_post_response(post: ForumPost, author_name: Optional[str]) -> ForumPostResponse:
    return ForumPostResponse(
        id=post.id, user_id=post.user_id, company_name=post.company_name,
        title=post.title, content=post.content, posted_at=post.posted_at,
        author_name=author_name or "Unknown",
    )


@router.get("", response_model=List[ForumPostResponse])
def list_posts(user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    rows = db.execute(
        select(ForumPost, User.name)
        .outerjoin(User, ForumPost.user_id == User.id)
        .order_by(ForumPost.posted_at.desc())
    ).all()
    return [to_post_response(post, name) for post, name in rows]


@router.post("", response_model=ForumPostResponse, status_code=201)
def create_post(data: ForumPostCreate, user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    post = ForumPost(**data.model_dump(), user_id=user.user_id)
    db.add(post)
    db.commit()
    db.refresh(post)

    author = db.get(User, user.user_id)
    logger.info("forum_post_created", post_id=post.id, user_id=user.user_id)
    return to_post_response(post, author.name if author else None)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(post_id: str, admin: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    post = db.get(ForumPost, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    db.delete(post)
    db.commit()

    logger.info("forum_post_deleted", post_id=post_id, admin_id=admin.user_id)
    return MessageResponse(message="Post deleted successfully")
