"""Answer entity."""

from pydantic import Field

from qna.domain.model.votable import VotableItem
from qna.domain.value import AnswerId, QuestionId


class Answer(VotableItem):
    """Answer to a question.

    At most one answer per question has ``is_accepted`` set at any time.
    """

    id: AnswerId
    question_id: QuestionId
    content: str = Field(min_length=30)
    is_accepted: bool = False
