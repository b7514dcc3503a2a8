# src/kgotla/api/v1/endpoints/posts.py
"""Post-related endpoints for the Kgotla API."""

import logging

from fastapi import APIRouter, HTTPException, Query, Response, status
from sqlalchemy import desc, or_, select
from sqlalchemy.orm import Session

from kgotla.models import Comment, Group, Post
from kgotla.schemas.comment import CommentCreate, CommentNode, CommentResponse
from kgotla.schemas.post import PostCreate, PostResponse, PostUpdate
from kgotla.services.comment_threads import build_comment_tree
from kgotla.services.notifications import notify_new_comment

from ..dependencies import CurrentUserDep, PageDep, SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_or_404(db: Session, post_id: int) -> Post:
    """Return a live post or raise 404."""
    post = db.scalars(
        select(Post).where(Post.id == post_id, Post.deleted.is_(False))
    ).first()
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def _get_own_post(db: Session, post_id: int, user_id: str, action: str) -> Post:
    post = get_post_or_404(db, post_id)
    if post.author_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You can only {action} your own posts",
        )
    return post


@router.get("", response_model=list[PostResponse])
async def list_posts(
    db: SessionDep,
    page: PageDep,
    group_id: int | None = Query(None, description="Only posts shared in this group"),
) -> list[Post]:
    """List posts, newest first.

    Args:
        db: Database session
        page: Pagination window
        group_id: Optional group filter

    Returns:
        List of live posts
    """
    stmt = select(Post).where(Post.deleted.is_(False))
    if group_id is not None:
        stmt = stmt.where(Post.group_id == group_id)
    stmt = stmt.order_by(desc(Post.created_at), desc(Post.id)).offset(page.offset).limit(page.limit)
    return list(db.scalars(stmt))


@router.get("/search", response_model=list[PostResponse])
async def search_posts(
    db: SessionDep,
    page: PageDep,
    q: str = Query("", description="Text to look for in titles and content"),
) -> list[Post]:
    """Case-insensitive search over post titles and content.

    A blank query returns an empty list rather than every post.
    """
    query = q.strip()
    if not query:
        return []

    pattern = f"%{query}%"
    stmt = (
        select(Post)
        .where(
            Post.deleted.is_(False),
            or_(Post.title.ilike(pattern), Post.content.ilike(pattern)),
        )
        .order_by(desc(Post.created_at), desc(Post.id))
        .offset(page.offset)
        .limit(page.limit)
    )
    return list(db.scalars(stmt))


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: SessionDep) -> Post:
    """Get a specific post by ID."""
    return get_post_or_404(db, post_id)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Publish a new post.

    Raises:
        HTTPException: If the referenced group does not exist
    """
    if post_data.group_id is not None and db.get(Group, post_data.group_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")

    post = Post(author_id=current_user.id, **post_data.model_dump())
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", current_user.id, post.id)
    return post


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Edit a post's content (author only)."""
    post = _get_own_post(db, post_id, current_user.id, "edit")
    for field, value in post_data.model_dump(exclude_unset=True).items():
        setattr(post, field, value)
    db.commit()
    db.refresh(post)
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Soft-delete a post (author only).

    The row stays; it drops out of listings and stops accepting votes
    and comments.
    """
    post = _get_own_post(db, post_id, current_user.id, "delete")
    post.deleted = True
    db.commit()
    logger.info("User %s deleted post %s", current_user.id, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{post_id}/comments", response_model=list[CommentNode])
async def list_post_comments(post_id: int, db: SessionDep) -> list[CommentNode]:
    """Return the post's comments as reply trees, oldest first at each level."""
    get_post_or_404(db, post_id)
    comments = db.scalars(
        select(Comment)
        .where(Comment.post_id == post_id, Comment.deleted.is_(False))
        .order_by(Comment.created_at, Comment.id)
    ).all()
    return build_comment_tree(comments)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    comment_data: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Comment:
    """Comment on a post or reply to one of its comments.

    Raises:
        HTTPException: If the post is missing, comments are disabled, or
            the parent comment is not on this post
    """
    post = get_post_or_404(db, post_id)
    if not post.allow_comments:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Comments are disabled for this post",
        )

    parent: Comment | None = None
    if comment_data.parent_id is not None:
        parent = db.scalars(
            select(Comment).where(
                Comment.id == comment_data.parent_id,
                Comment.post_id == post_id,
                Comment.deleted.is_(False),
            )
        ).first()
        if parent is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Parent comment not found",
            )

    comment = Comment(
        post_id=post_id,
        author_id=current_user.id,
        parent_id=comment_data.parent_id,
        content=comment_data.content,
    )
    db.add(comment)
    post.comment_count = Post.comment_count + 1
    db.flush()
    notify_new_comment(db, post=post, comment=comment, parent=parent)
    db.commit()
    db.refresh(comment)
    return comment
