"""Application layer DI providers."""

from dishka import Scope, provide

from qna.application.outbox import NotificationOutbox
from qna.application.usecase.answer import (
    AcceptAnswerUseCase,
    CreateAnswerUseCase,
    DeleteAnswerUseCase,
    UnacceptAnswerUseCase,
    UpdateAnswerUseCase,
)
from qna.application.usecase.notification import (
    DeleteNotificationUseCase,
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllReadUseCase,
    MarkReadUseCase,
)
from qna.application.usecase.question import (
    CreateQuestionUseCase,
    DeleteQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
    UpdateQuestionUseCase,
)
from qna.application.usecase.tag import GetTagUseCase, ListTagsUseCase, SearchTagsUseCase
from qna.application.usecase.user import (
    GetUserStatsUseCase,
    ListUserAnswersUseCase,
    ListUserQuestionsUseCase,
)
from qna.application.usecase.vote import CastVoteUseCase
from qna.domain.service import (
    AcceptanceService,
    AnswerService,
    NotificationService,
    QuestionService,
    VoteService,
)
from qna.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Question use cases
    @provide
    def get_create_question_use_case(
        self, question_service: QuestionService
    ) -> CreateQuestionUseCase:
        """Provide create question use case."""
        return CreateQuestionUseCase(question_service=question_service)

    @provide
    def get_get_question_use_case(
        self, question_service: QuestionService, answer_service: AnswerService
    ) -> GetQuestionUseCase:
        """Provide get question use case."""
        return GetQuestionUseCase(
            question_service=question_service, answer_service=answer_service
        )

    @provide
    def get_list_questions_use_case(
        self, question_service: QuestionService
    ) -> ListQuestionsUseCase:
        """Provide list questions use case."""
        return ListQuestionsUseCase(question_service=question_service)

    @provide
    def get_delete_question_use_case(
        self, question_service: QuestionService
    ) -> DeleteQuestionUseCase:
        """Provide delete question use case."""
        return DeleteQuestionUseCase(question_service=question_service)

    @provide
    def get_update_question_use_case(
        self, question_service: QuestionService
    ) -> UpdateQuestionUseCase:
        """Provide update question use case."""
        return UpdateQuestionUseCase(question_service=question_service)

    # Answer use cases
    @provide
    def get_create_answer_use_case(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        outbox: NotificationOutbox,
    ) -> CreateAnswerUseCase:
        """Provide create answer use case."""
        return CreateAnswerUseCase(
            question_service=question_service,
            answer_service=answer_service,
            outbox=outbox,
        )

    @provide
    def get_delete_answer_use_case(
        self, answer_service: AnswerService
    ) -> DeleteAnswerUseCase:
        """Provide delete answer use case."""
        return DeleteAnswerUseCase(answer_service=answer_service)

    @provide
    def get_update_answer_use_case(
        self, answer_service: AnswerService
    ) -> UpdateAnswerUseCase:
        """Provide update answer use case."""
        return UpdateAnswerUseCase(answer_service=answer_service)

    @provide
    def get_accept_answer_use_case(
        self, acceptance_service: AcceptanceService, outbox: NotificationOutbox
    ) -> AcceptAnswerUseCase:
        """Provide accept answer use case."""
        return AcceptAnswerUseCase(acceptance_service=acceptance_service, outbox=outbox)

    @provide
    def get_unaccept_answer_use_case(
        self, acceptance_service: AcceptanceService
    ) -> UnacceptAnswerUseCase:
        """Provide unaccept answer use case."""
        return UnacceptAnswerUseCase(acceptance_service=acceptance_service)

    # Vote use cases
    @provide
    def get_cast_vote_use_case(
        self, vote_service: VoteService, outbox: NotificationOutbox
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service, outbox=outbox)

    # Notification use cases
    @provide
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide
    def get_unread_count_use_case(
        self, notification_service: NotificationService
    ) -> GetUnreadCountUseCase:
        """Provide unread count use case."""
        return GetUnreadCountUseCase(notification_service=notification_service)

    @provide
    def get_mark_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkReadUseCase:
        """Provide mark read use case."""
        return MarkReadUseCase(notification_service=notification_service)

    @provide
    def get_mark_all_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllReadUseCase:
        """Provide mark all read use case."""
        return MarkAllReadUseCase(notification_service=notification_service)

    @provide
    def get_delete_notification_use_case(
        self, notification_service: NotificationService
    ) -> DeleteNotificationUseCase:
        """Provide delete notification use case."""
        return DeleteNotificationUseCase(notification_service=notification_service)

    # Tag use cases
    @provide
    def get_list_tags_use_case(self, question_service: QuestionService) -> ListTagsUseCase:
        """Provide list tags use case."""
        return ListTagsUseCase(question_service=question_service)

    @provide
    def get_get_tag_use_case(self, question_service: QuestionService) -> GetTagUseCase:
        """Provide get tag use case."""
        return GetTagUseCase(question_service=question_service)

    @provide
    def get_search_tags_use_case(
        self, question_service: QuestionService
    ) -> SearchTagsUseCase:
        """Provide search tags use case."""
        return SearchTagsUseCase(question_service=question_service)

    # User content use cases
    @provide
    def get_list_user_questions_use_case(
        self, question_service: QuestionService
    ) -> ListUserQuestionsUseCase:
        """Provide list user questions use case."""
        return ListUserQuestionsUseCase(question_service=question_service)

    @provide
    def get_list_user_answers_use_case(
        self, answer_service: AnswerService, question_service: QuestionService
    ) -> ListUserAnswersUseCase:
        """Provide list user answers use case."""
        return ListUserAnswersUseCase(
            answer_service=answer_service, question_service=question_service
        )

    @provide
    def get_user_stats_use_case(
        self, question_service: QuestionService, answer_service: AnswerService
    ) -> GetUserStatsUseCase:
        """Provide user stats use case."""
        return GetUserStatsUseCase(
            question_service=question_service, answer_service=answer_service
        )
