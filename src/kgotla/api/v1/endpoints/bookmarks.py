# src/kgotla/api/v1/endpoints/bookmarks.py
"""Bookmark endpoints for the Kgotla API."""

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kgotla.models import Bookmark, Post
from kgotla.schemas.bookmark import BookmarkCreate, BookmarkResponse
from kgotla.schemas.post import PostResponse

from ..dependencies import CurrentUserDep, PageDep, SessionDep
from .posts import get_post_or_404

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


def _already_bookmarked() -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Post already bookmarked")


def _find_bookmark(db: Session, user_id: str, post_id: int) -> Bookmark | None:
    return db.scalars(
        select(Bookmark).where(Bookmark.user_id == user_id, Bookmark.post_id == post_id)
    ).first()


@router.get("", response_model=list[PostResponse])
async def list_bookmarks(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: PageDep,
) -> list[Post]:
    """Return the caller's bookmarked posts, most recently saved first."""
    stmt = (
        select(Post)
        .join(Bookmark, Bookmark.post_id == Post.id)
        .where(Bookmark.user_id == current_user.id, Post.deleted.is_(False))
        .order_by(desc(Bookmark.created_at), desc(Bookmark.id))
        .offset(page.offset)
        .limit(page.limit)
    )
    return list(db.scalars(stmt))


@router.post("", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    bookmark_data: BookmarkCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Bookmark:
    """Bookmark a post."""
    get_post_or_404(db, bookmark_data.post_id)

    if _find_bookmark(db, current_user.id, bookmark_data.post_id) is not None:
        raise _already_bookmarked()

    bookmark = Bookmark(user_id=current_user.id, post_id=bookmark_data.post_id)
    try:
        with db.begin_nested():
            db.add(bookmark)
    except IntegrityError as err:
        # A concurrent request saved the same post first.
        raise _already_bookmarked() from err
    db.commit()
    db.refresh(bookmark)
    return bookmark


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_bookmark(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Remove a bookmark."""
    bookmark = _find_bookmark(db, current_user.id, post_id)
    if bookmark is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Bookmark not found",
        )

    db.delete(bookmark)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
