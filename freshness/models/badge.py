"""
shields.io endpoint badge payload.

See https://shields.io/badges/endpoint-badge for the consuming side.
"""

from typing import Literal

from pydantic import BaseModel, Field

from freshness.constants import BADGE_LABEL, BADGE_LABEL_COLOR, BADGE_SCHEMA_VERSION


class BadgeResponse(BaseModel):
    schemaVersion: Literal[1] = BADGE_SCHEMA_VERSION
    label: str = BADGE_LABEL
    labelColor: str = BADGE_LABEL_COLOR
    message: str = Field(min_length=1)
