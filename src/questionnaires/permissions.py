import typing as t

from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from accounts.models import ReviewUser, Role
from questionnaires.models import Question, Questionnaire


class HasRole(BasePermission):
    """Allows users whose role is at least the given one."""

    message = "Your role does not allow this action."

    def __init__(self, role: Role) -> None:
        """Store the minimum role."""
        self.role = role

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Check the authenticated user's role."""
        user = t.cast(ReviewUser, request.user)
        return bool(user and user.is_authenticated and user.has_role_at_least(self.role))


class RootPermission(BasePermission):
    def __init__(self, action: str) -> None:
        """Store the action."""
        self.action = action

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Must implement abstract method. This is due to an error in Ninja Extra.

        This Method will be ignored, only has_object_permission will be called.
        """
        return True


class CanEditQuestionnaire(RootPermission):
    def __init__(self, action: str) -> None:
        """Store the action and word the denial after it."""
        super().__init__(action)
        self.message = f"You do not have permission to {action} this questionnaire."

    def has_object_permission(
        self,
        request: HttpRequest,
        controller: ControllerBase,
        obj: Questionnaire | Question,
    ) -> bool:
        """Administrators, the owning instructor and their teaching assistants may modify it."""
        questionnaire = obj.questionnaire if isinstance(obj, Question) else obj
        return questionnaire.can_be_edited_by(t.cast(ReviewUser, request.user))
