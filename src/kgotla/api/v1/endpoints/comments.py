# src/kgotla/api/v1/endpoints/comments.py
"""Comment endpoints for the Kgotla API."""

from fastapi import APIRouter, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from kgotla.models import Comment, Post
from kgotla.schemas.comment import CommentResponse, CommentUpdate

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/comments", tags=["comments"])


def _get_comment_or_404(db: Session, comment_id: int) -> Comment:
    comment = db.scalars(
        select(Comment).where(Comment.id == comment_id, Comment.deleted.is_(False))
    ).first()
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return comment


def _get_own_comment(db: Session, comment_id: int, user_id: str, action: str) -> Comment:
    comment = _get_comment_or_404(db, comment_id)
    if comment.author_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You can only {action} your own comments",
        )
    return comment


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: int, db: SessionDep) -> Comment:
    """Get a specific comment by ID."""
    return _get_comment_or_404(db, comment_id)


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    comment_data: CommentUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    """Edit a comment's text (author only)."""
    comment = _get_own_comment(db, comment_id, current_user.id, "edit")
    comment.content = comment_data.content
    db.commit()
    db.refresh(comment)
    return comment


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_comment(
    comment_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Soft-delete a comment (author only) and drop it from the post's count."""
    comment = _get_own_comment(db, comment_id, current_user.id, "delete")
    comment.deleted = True
    post = db.get(Post, comment.post_id)
    if post is not None:
        post.comment_count = Post.comment_count - 1
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
