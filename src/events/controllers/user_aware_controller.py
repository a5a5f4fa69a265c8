import typing as t

from ninja_extra import ControllerBase

from accounts.models import OfrendaUser


class UserAwareController(ControllerBase):
    def user(self) -> OfrendaUser:
        """Get the authenticated user for this request."""
        return t.cast(OfrendaUser, self.context.request.user)  # type: ignore[union-attr]
