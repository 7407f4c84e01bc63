"""Domain services."""

from .acceptance_service import AcceptanceResult, AcceptanceService
from .answer_service import AnswerService
from .base import Service
from .jwt_service import JWTService
from .notification_service import (
    NotificationDelivery,
    NotificationService,
    NotificationSink,
)
from .question_service import QuestionService
from .vote_service import VoteResult, VoteService

__all__ = [
    "AcceptanceResult",
    "AcceptanceService",
    "AnswerService",
    "JWTService",
    "NotificationDelivery",
    "NotificationService",
    "NotificationSink",
    "QuestionService",
    "Service",
    "VoteResult",
    "VoteService",
]
