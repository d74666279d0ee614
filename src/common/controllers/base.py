import typing as t

from ninja_extra import ControllerBase

from accounts.models import ReviewUser


class UserAwareController(ControllerBase):
    def user(self) -> ReviewUser:
        """Get the user for this request."""
        return t.cast(ReviewUser, self.context.request.user)  # type: ignore[union-attr]
