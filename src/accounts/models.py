import typing as t
import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models


class Role(models.TextChoices):
    """Roles in ascending order of privilege."""

    STUDENT = "student", "Student"
    TEACHING_ASSISTANT = "teaching_assistant", "Teaching Assistant"
    INSTRUCTOR = "instructor", "Instructor"
    ADMINISTRATOR = "administrator", "Administrator"
    SUPER_ADMINISTRATOR = "super_administrator", "Super Administrator"

    @classmethod
    def rank(cls, role: str) -> int:
        """Position of ``role`` in the privilege ordering."""
        return list(cls.values).index(role)


class ReviewUserQueryset(models.QuerySet["ReviewUser"]):
    """Queryset for ReviewUser."""

    def with_role_at_least(self, role: Role) -> t.Self:
        """Users whose role is ``role`` or more privileged."""
        allowed = [r for r in Role.values if Role.rank(r) >= Role.rank(role)]
        return self.filter(role__in=allowed)


class ReviewUserManager(UserManager["ReviewUser"]):
    def get_queryset(self) -> ReviewUserQueryset:
        """Get queryset for ReviewUser."""
        return ReviewUserQueryset(self.model)


class ReviewUser(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    role = models.CharField(max_length=32, choices=Role.choices, default=Role.STUDENT, db_index=True)
    instructor = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assistants",
        help_text="The instructor this user works under, if any.",
    )

    objects = ReviewUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]

    def has_role_at_least(self, role: Role) -> bool:
        """Whether the user's role is ``role`` or more privileged. Superusers always are."""
        if self.is_superuser:
            return True
        return Role.rank(self.role) >= Role.rank(role)

    @property
    def is_admin(self) -> bool:
        return self.has_role_at_least(Role.ADMINISTRATOR)

    @property
    def acting_instructor_id(self) -> uuid.UUID:
        """The instructor on whose behalf this user creates questionnaires.

        Instructors and administrators act for themselves. Teaching assistants act
        for the instructor they work under, falling back to themselves when unassigned.
        """
        if self.has_role_at_least(Role.INSTRUCTOR) or self.instructor_id is None:
            return self.id
        return t.cast(uuid.UUID, self.instructor_id)
