"""Invalidation of recorded answers ahead of structural questionnaire edits."""

from uuid import UUID

import structlog
from django.db import transaction

from questionnaires.models import Answer

logger = structlog.get_logger(__name__)


@transaction.atomic
def check_and_delete_responses(questionnaire_id: UUID) -> bool:
    """Delete every answer recorded against the questionnaire's questions.

    Answers given to a rubric stop matching it once questions are added or removed,
    so they are discarded rather than blocking the edit. Callers must tell the user.

    Args:
        questionnaire_id: The questionnaire about to change.

    Returns:
        True if any answers were deleted, False if there were none.
    """
    answers = Answer.objects.filter(question__questionnaire_id=questionnaire_id)
    if not answers.exists():
        return False
    deleted, _ = answers.delete()
    logger.info("responses_invalidated", questionnaire_id=str(questionnaire_id), count=deleted)
    return True
