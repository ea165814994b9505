from __future__ import annotations

from dataclasses import dataclass

from .errors import Unauthenticated


@dataclass(frozen=True)
class IdentityResolver:
    """Maps a user reference to a concrete user id.

    A reference equal to `self_alias` means the caller, whose id is passed
    explicitly as `current_user`. Any other reference is taken as a user id.
    """

    self_alias: str = "me"

    def is_self(self, user_ref: str) -> bool:
        return user_ref == self.self_alias

    def resolve(self, user_ref: str, current_user: str | None = None) -> str:
        if self.is_self(user_ref):
            if not current_user:
                raise Unauthenticated(
                    f"'{self.self_alias}' requires an authenticated user",
                    details={"user_ref": user_ref},
                )
            return current_user
        return user_ref
