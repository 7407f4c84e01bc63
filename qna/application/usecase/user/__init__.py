"""User content use cases."""

from .get_user_stats import GetUserStatsRequest, GetUserStatsResponse, GetUserStatsUseCase
from .list_user_answers import (
    ListUserAnswersRequest,
    ListUserAnswersResponse,
    ListUserAnswersUseCase,
    UserAnswerItem,
)
from .list_user_questions import (
    ListUserQuestionsRequest,
    ListUserQuestionsResponse,
    ListUserQuestionsUseCase,
)

__all__ = [
    "GetUserStatsRequest",
    "GetUserStatsResponse",
    "GetUserStatsUseCase",
    "ListUserAnswersRequest",
    "ListUserAnswersResponse",
    "ListUserAnswersUseCase",
    "ListUserQuestionsRequest",
    "ListUserQuestionsResponse",
    "ListUserQuestionsUseCase",
    "UserAnswerItem",
]
