from django.db import models

from common.models import TimeStampedModel


class TreeFolder(TimeStampedModel):
    """A named category folder, e.g. "Review" or "Author Feedback"."""

    name = models.CharField(max_length=255, unique=True)
    parent = models.ForeignKey("self", on_delete=models.CASCADE, null=True, blank=True, related_name="children")

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class FolderNode(TimeStampedModel):
    """The navigation-tree node for a folder."""

    folder = models.OneToOneField(TreeFolder, on_delete=models.CASCADE, related_name="node")
    parent = models.ForeignKey("self", on_delete=models.CASCADE, null=True, blank=True, related_name="children")

    def __str__(self) -> str:
        return f"FolderNode({self.folder})"


class QuestionnaireNode(TimeStampedModel):
    """Files a questionnaire under a folder node. One node per questionnaire."""

    parent = models.ForeignKey(FolderNode, on_delete=models.CASCADE, related_name="questionnaire_nodes")
    questionnaire = models.OneToOneField(
        "questionnaires.Questionnaire", on_delete=models.CASCADE, related_name="node"
    )

    def __str__(self) -> str:
        return f"QuestionnaireNode({self.questionnaire_id})"
