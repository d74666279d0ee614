"""Custom exceptions for the questionnaires app."""

import typing as t


class QuestionnaireException(Exception):
    """Base exception for the questionnaires app."""


class NotFoundError(QuestionnaireException):
    """Base class for missing entities."""

    message: t.ClassVar[str] = "Not found."

    def __init__(self, entity_id: t.Any = None) -> None:
        self.entity_id = entity_id
        super().__init__(self.message)


class QuestionnaireNotFoundError(NotFoundError):
    message = "No such Questionnaire exists."


class QuestionNotFoundError(NotFoundError):
    message = "No such Question exists."


class UnknownTypeError(QuestionnaireException):
    """Base class for type names outside the known set."""

    kind: t.ClassVar[str] = "type"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'"{name}" is not a valid {self.kind}.')


class UnknownQuestionTypeError(UnknownTypeError):
    kind = "question type"


class UnknownQuestionnaireTypeError(UnknownTypeError):
    kind = "questionnaire type"


class QuestionnaireInUseError(QuestionnaireException):
    """Raised when deleting a questionnaire that an assignment still uses."""

    def __init__(self, assignment_name: str) -> None:
        self.assignment_name = assignment_name
        super().__init__(
            f"The assignment {assignment_name} uses this questionnaire. "
            "Remove it from the assignment before deleting the questionnaire."
        )


class HasResponsesError(QuestionnaireException):
    """Raised when deleting a questionnaire whose questions have recorded answers."""

    def __init__(self) -> None:
        super().__init__("There are responses based on this rubric, we suggest you do not delete it.")


class QuestionnaireCopyError(QuestionnaireException):
    """Raised when a questionnaire could not be copied."""

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(
            "The questionnaire was not able to be copied. "
            f"Please check the original course for missing information. {cause}"
        )
