"""
Versioned frozen base model.

Every instance gets a process-wide, monotonically increasing version at
construction. Caches key on versions instead of deep contents, so a new
instance (even a structurally equal one) is always a new identity.
"""

from __future__ import annotations

import itertools
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr

_versions = itertools.count(1)


class VersionedModel(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    _version: int = PrivateAttr(default=0)

    def model_post_init(self, __context: Any) -> None:
        self._version = next(_versions)

    @property
    def version(self) -> int:
        """Identity of this instance for cache keys."""
        return self._version

    def model_copy(self, *, update: dict[str, Any] | None = None, deep: bool = False) -> Any:
        # copies carry the private version along; hand out a fresh one
        copied = super().model_copy(update=update, deep=deep)
        copied._version = next(_versions)
        return copied
