from .question import QuestionController
from .questionnaire import QuestionnaireController

__all__ = ["QuestionController", "QuestionnaireController"]
