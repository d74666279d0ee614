"""Questionnaire service layer."""

from .answer_guard import check_and_delete_responses
from .question_service import QuestionService, apply_question_patch
from .questionnaire_service import AddQuestionsResult, QuestionnaireService, QuestionnaireUpdateResult

__all__ = [
    "AddQuestionsResult",
    "QuestionService",
    "QuestionnaireService",
    "QuestionnaireUpdateResult",
    "apply_question_patch",
    "check_and_delete_responses",
]
