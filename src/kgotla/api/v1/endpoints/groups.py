# src/kgotla/api/v1/endpoints/groups.py
"""Group endpoints for the Kgotla API."""

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kgotla.models import Group, GroupMember, Post
from kgotla.models.group import GROUP_ROLE_ADMIN
from kgotla.schemas.common import StatusMessage
from kgotla.schemas.group import GroupCreate, GroupResponse
from kgotla.schemas.post import PostResponse

from ..dependencies import CurrentUserDep, PageDep, SessionDep

router = APIRouter(prefix="/groups", tags=["groups"])


def _get_group_or_404(db: Session, group_id: int) -> Group:
    group = db.get(Group, group_id)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return group


def _get_membership(db: Session, group_id: int, user_id: str) -> GroupMember | None:
    return db.get(GroupMember, (group_id, user_id))


def _already_member() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Already a member of this group",
    )


@router.get("", response_model=list[GroupResponse])
async def list_groups(db: SessionDep, page: PageDep) -> list[Group]:
    """List groups, newest first."""
    stmt = (
        select(Group)
        .order_by(desc(Group.created_at), desc(Group.id))
        .offset(page.offset)
        .limit(page.limit)
    )
    return list(db.scalars(stmt))


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(group_id: int, db: SessionDep) -> Group:
    """Get a specific group by ID."""
    return _get_group_or_404(db, group_id)


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Group:
    """Create a group; the creator becomes its first admin."""
    group = Group(creator_id=current_user.id, member_count=1, **group_data.model_dump())
    db.add(group)
    db.flush()
    db.add(GroupMember(group_id=group.id, user_id=current_user.id, role=GROUP_ROLE_ADMIN))
    db.commit()
    db.refresh(group)
    return group


@router.post("/{group_id}/join", response_model=StatusMessage, status_code=status.HTTP_201_CREATED)
async def join_group(
    group_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusMessage:
    """Join a group."""
    group = _get_group_or_404(db, group_id)
    if _get_membership(db, group_id, current_user.id) is not None:
        raise _already_member()

    try:
        with db.begin_nested():
            db.add(GroupMember(group_id=group_id, user_id=current_user.id))
    except IntegrityError as err:
        # Lost a race with a concurrent join by the same user.
        raise _already_member() from err
    group.member_count = Group.member_count + 1
    db.commit()
    return StatusMessage(status="joined")


@router.post("/{group_id}/leave", response_model=StatusMessage)
async def leave_group(
    group_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusMessage:
    """Leave a group."""
    group = _get_group_or_404(db, group_id)
    membership = _get_membership(db, group_id, current_user.id)
    if membership is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not a member of this group",
        )

    db.delete(membership)
    group.member_count = Group.member_count - 1
    db.commit()
    return StatusMessage(status="left")


@router.get("/{group_id}/posts", response_model=list[PostResponse])
async def get_group_posts(group_id: int, db: SessionDep, page: PageDep) -> list[Post]:
    """Get live posts shared in a group, newest first."""
    _get_group_or_404(db, group_id)
    stmt = (
        select(Post)
        .where(Post.group_id == group_id, Post.deleted.is_(False))
        .order_by(desc(Post.created_at), desc(Post.id))
        .offset(page.offset)
        .limit(page.limit)
    )
    return list(db.scalars(stmt))
