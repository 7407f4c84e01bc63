"""Domain model entities for the Q&A site."""

from qna.domain.model.activity import ContentTotals
from qna.domain.model.answer import Answer
from qna.domain.model.ledger import VoteLedger, VoteOutcome
from qna.domain.model.notification import Notification, NotificationEvent
from qna.domain.model.question import Question
from qna.domain.model.tag import TagStats, TagUsage
from qna.domain.model.votable import VotableItem

__all__ = [
    "Answer",
    "ContentTotals",
    "Notification",
    "NotificationEvent",
    "Question",
    "TagStats",
    "TagUsage",
    "VotableItem",
    "VoteLedger",
    "VoteOutcome",
]
