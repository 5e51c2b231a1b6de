"""
Pydantic schemas for droid payloads.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DroidFields(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    # Owning character's name; advisory only, not a foreign key.
    belongs: str = Field(..., min_length=1)
