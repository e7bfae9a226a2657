"""Pure domain services: vote tallying and comment threads."""

from amendment_engine.domain.services.comment_thread import (
    append_comment,
    append_reply,
    resolve_comment,
    unresolved_concerns,
)
from amendment_engine.domain.services.vote_tally import tally, tally_proposal

__all__: list[str] = [
    "append_comment",
    "append_reply",
    "resolve_comment",
    "tally",
    "tally_proposal",
    "unresolved_concerns",
]
