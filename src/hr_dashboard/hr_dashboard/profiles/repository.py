from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Profile


class ProfileRepository(Protocol):
    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def list_with_dob(self) -> Sequence[Profile]:
        raise NotImplementedError
