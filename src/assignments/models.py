from django.conf import settings
from django.db import models

from common.models import TimeStampedModel


class Assignment(TimeStampedModel):
    """A course assignment. Only its questionnaire usage matters here."""

    name = models.CharField(max_length=255)
    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="assignments", null=True, blank=True
    )

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class AssignmentQuestionnaire(TimeStampedModel):
    """Links an assignment to a questionnaire it uses, optionally for a single review round."""

    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="assignment_questionnaires")
    questionnaire = models.ForeignKey(
        "questionnaires.Questionnaire", on_delete=models.PROTECT, related_name="assignment_questionnaires"
    )
    used_in_round = models.PositiveIntegerField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.assignment} uses {self.questionnaire_id}"
