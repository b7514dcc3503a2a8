"""Assemble flat comment rows into reply trees."""
from __future__ import annotations

from collections.abc import Sequence

from kgotla.models import Comment
from kgotla.schemas.comment import CommentNode


def build_comment_tree(comments: Sequence[Comment]) -> list[CommentNode]:
    """Nest comments under their parents.

    Input order is preserved at every level, so callers pass rows sorted
    oldest first. A reply whose parent is absent from ``comments`` (for
    example because the parent was deleted) is promoted to the top level.
    """
    nodes = {comment.id: CommentNode.model_validate(comment) for comment in comments}
    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[comment.id]
        parent = nodes.get(comment.parent_id) if comment.parent_id is not None else None
        if parent is None:
            roots.append(node)
        else:
            parent.replies.append(node)
    return roots
