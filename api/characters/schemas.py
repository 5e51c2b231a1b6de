"""
Pydantic schemas for character payloads.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CharacterFields(BaseModel):
    """
    Column values written on create/update, built only after validation passed.
    """

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    age: int | float
