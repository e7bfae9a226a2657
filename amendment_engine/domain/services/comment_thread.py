"""Comment thread domain service.

Comments form an append-only log embedded in a proposal. These functions
never mutate their input; each returns a new tuple.

Resolution is an external moderation action: no workflow transition calls
resolve_comment. Unresolved concerns are only reported, never enforced.
"""

from __future__ import annotations

from dataclasses import replace

from amendment_engine.domain.errors.proposal import CommentNotFoundError
from amendment_engine.domain.models.proposal import Comment, CommentType


def append_comment(
    comments: tuple[Comment, ...], comment: Comment
) -> tuple[Comment, ...]:
    """Append a top-level comment.

    Args:
        comments: Existing thread.
        comment: Comment to append. resolved is forced to False.

    Returns:
        New thread with the comment at the end.
    """
    return (*comments, replace(comment, resolved=False))


def append_reply(
    comments: tuple[Comment, ...], parent_id: str, reply: Comment
) -> tuple[Comment, ...]:
    """Append a reply under the comment with the given ID, at any depth.

    Args:
        comments: Existing thread.
        parent_id: ID of the comment being replied to.
        reply: Reply comment. resolved is forced to False.

    Returns:
        New thread with the reply attached.

    Raises:
        CommentNotFoundError: If no comment in the thread has parent_id.
    """
    updated, found = _attach(comments, parent_id, replace(reply, resolved=False))
    if not found:
        raise CommentNotFoundError(parent_id)
    return updated


def _attach(
    comments: tuple[Comment, ...], parent_id: str, reply: Comment
) -> tuple[tuple[Comment, ...], bool]:
    result: list[Comment] = []
    found = False
    for comment in comments:
        if not found and comment.id == parent_id:
            comment = replace(comment, replies=(*comment.replies, reply))
            found = True
        elif not found and comment.replies:
            replies, found = _attach(comment.replies, parent_id, reply)
            if found:
                comment = replace(comment, replies=replies)
        result.append(comment)
    return tuple(result), found


def resolve_comment(
    comments: tuple[Comment, ...], comment_id: str
) -> tuple[Comment, ...]:
    """Mark a top-level comment resolved (moderation action).

    Raises:
        CommentNotFoundError: If no top-level comment has comment_id.
    """
    if not any(c.id == comment_id for c in comments):
        raise CommentNotFoundError(comment_id)
    return tuple(
        replace(c, resolved=True) if c.id == comment_id else c for c in comments
    )


def unresolved_concerns(comments: tuple[Comment, ...]) -> list[Comment]:
    """Get top-level CONCERN comments that are not resolved."""
    return [c for c in comments if c.type == CommentType.CONCERN and not c.resolved]
