"""Write preconditions for conditional store calls."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class Precondition(BaseModel):
    """Condition the current document must satisfy for a write to apply.

    Exactly one of ``exists`` / ``version`` is set:

    * ``exists=False``: the document must not exist (create-only).
    * ``version="..."``: the document must exist at that revision.
    """

    model_config = ConfigDict(frozen=True)

    exists: bool | None = None
    version: str | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> Precondition:
        if (self.exists is None) == (self.version is None):
            raise ValueError("Precondition needs exactly one of exists/version")
        if self.exists is True:
            raise ValueError("Use at_version() to require an existing document")
        return self

    @classmethod
    def absent(cls) -> Precondition:
        return cls(exists=False)

    @classmethod
    def at_version(cls, version: str) -> Precondition:
        return cls(version=version)

    def to_query_params(self) -> dict[str, str]:
        """Firestore ``currentDocument`` query parameters."""
        if self.version is not None:
            return {"currentDocument.updateTime": self.version}
        return {"currentDocument.exists": "false"}
