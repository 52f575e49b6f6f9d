"""Repository identity and the upstream community profile payload."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


@dataclass(frozen=True)
class RepositoryRef:
    """Immutable owner/name pair."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class CommunityMetrics(BaseModel):
    """
    Community profile metrics as returned by GitHub.

    Only ``updated_at`` drives the badge. A missing, null or unparsable value
    is normalized to None rather than rejected, so callers decide how to
    surface it.
    """

    model_config = ConfigDict(extra="ignore")

    updated_at: Optional[datetime] = None
    health_percentage: Optional[int] = None

    @field_validator("updated_at", mode="wrap")
    @classmethod
    def lenient_timestamp(cls, v: Any, handler) -> Optional[datetime]:
        try:
            parsed = handler(v)
        except ValidationError:
            return None
        if parsed is None:
            return None
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    @field_validator("health_percentage", mode="wrap")
    @classmethod
    def lenient_percentage(cls, v: Any, handler) -> Optional[int]:
        try:
            return handler(v)
        except ValidationError:
            return None
