"""Placement of questionnaires in the category folder tree."""

import structlog
from django.db import transaction

from questionnaires.models import Questionnaire
from questionnaires.question_types import QuestionnaireType

from .exceptions import FilingError
from .models import FolderNode, QuestionnaireNode, TreeFolder

logger = structlog.get_logger(__name__)

ROOT_FOLDER_NAME = "Questionnaires"


def file_questionnaire(questionnaire: Questionnaire) -> QuestionnaireNode:
    """File a questionnaire under the folder matching its display category.

    Filing is idempotent: an already filed questionnaire is moved to the matching folder.

    Args:
        questionnaire: A persisted questionnaire.

    Returns:
        The questionnaire's node.

    Raises:
        FilingError: If no folder node exists for the display category.
    """
    folder_node = (
        FolderNode.objects.select_related("folder").filter(folder__name__iexact=questionnaire.display_type).first()
    )
    if folder_node is None:
        logger.warning(
            "questionnaire_filing_failed",
            questionnaire_id=str(questionnaire.id),
            display_type=questionnaire.display_type,
        )
        raise FilingError(questionnaire.display_type)

    node, _ = QuestionnaireNode.objects.update_or_create(questionnaire=questionnaire, defaults={"parent": folder_node})
    logger.info("questionnaire_filed", questionnaire_id=str(questionnaire.id), folder=folder_node.folder.name)
    return node


@transaction.atomic
def bootstrap_folder_tree() -> list[TreeFolder]:
    """Ensure the root folder and one folder per questionnaire category exist.

    Returns:
        The category folders, in category order.
    """
    root, _ = TreeFolder.objects.get_or_create(name=ROOT_FOLDER_NAME, defaults={"parent": None})
    root_node, _ = FolderNode.objects.get_or_create(folder=root, defaults={"parent": None})
    folders: list[TreeFolder] = []
    for display_type in QuestionnaireType.display_types():
        folder, _ = TreeFolder.objects.get_or_create(name=display_type, defaults={"parent": root})
        FolderNode.objects.get_or_create(folder=folder, defaults={"parent": root_node})
        folders.append(folder)
    return folders
