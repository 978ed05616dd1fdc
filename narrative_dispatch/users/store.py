"""
User Store — the users seen so far, keyed by page-scoped ID.

In-memory for the lifetime of the process; conversation history is not kept.
"""

from typing import Dict, Optional

from narrative_dispatch.models.user import User


class UserStore:
    def __init__(self):
        self._users: Dict[str, User] = {}

    def get(self, psid: str) -> Optional[User]:
        return self._users.get(psid)

    def get_or_create(self, psid: str, profile: Optional[dict] = None) -> User:
        """Return the known user, or register a new one from an optional profile."""
        user = self._users.get(psid)
        if user is None:
            user = User(psid=psid)
            if profile:
                user.apply_profile(profile)
            self._users[psid] = user
        return user

    def count(self) -> int:
        return len(self._users)
