"""
Character business logic.

Scope:
- list (whole table, or paginated when limit/offset is given)
- search by name fragment
- create / update (existence pre-check, then validation) / delete
"""

from __future__ import annotations

import logging
from typing import Any

from core import config, validation
from core.db import PersistenceGateway, Table
from core.errors import NotFoundError

from . import schemas

logger = logging.getLogger(__name__)

CHARACTERS = Table(name="characters", columns=("name", "description", "age"))

REQUIRED_FIELDS = ("name", "description", "age")


def validate_payload(payload: dict[str, Any] | None, *, operation: str) -> schemas.CharacterFields:
    """
    Apply the write-time rules in order: presence, string types, numeric age,
    digit-free name.
    """
    payload = payload or {}
    validation.require_fields(
        payload,
        REQUIRED_FIELDS,
        "Name, description and age are required fields",
        operation=operation,
    )
    validation.require_strings(
        payload,
        ("name", "description"),
        "Name and description must be strings",
        operation=operation,
    )
    validation.require_number(payload["age"], "Age must be a number", operation=operation)
    validation.forbid_digits(payload["name"], "Name cannot contain numbers", operation=operation)
    return schemas.CharacterFields(
        name=payload["name"],
        description=payload["description"],
        age=payload["age"],
    )


async def list_characters(
    gateway: PersistenceGateway,
    *,
    limit: str | None = None,
    offset: str | None = None,
) -> list[dict]:
    if limit is None and offset is None:
        return await gateway.list_rows(CHARACTERS)

    return await gateway.list_rows(
        CHARACTERS,
        limit=validation.parse_int_or_default(limit, config.PAGINATION_DEFAULTS["limit"]),
        offset=validation.parse_int_or_default(offset, config.PAGINATION_DEFAULTS["offset"]),
    )


async def search_characters(gateway: PersistenceGateway, name: str | None) -> list[dict]:
    # An empty fragment degenerates to "contains empty string", i.e. every row.
    return await gateway.search_by_name(CHARACTERS, name or "")


async def create_character(gateway: PersistenceGateway, payload: dict[str, Any] | None) -> int:
    fields = validate_payload(payload, operation="characters.create")
    character_id = await gateway.insert(CHARACTERS, fields.model_dump())
    logger.info("character_created id=%s", character_id)
    return character_id


async def update_character(
    gateway: PersistenceGateway,
    character_id: str,
    payload: dict[str, Any] | None,
) -> None:
    row_id = validation.parse_row_id(character_id)
    existing = await gateway.get_by_id(CHARACTERS, row_id) if row_id is not None else None
    if existing is None:
        raise NotFoundError(
            "Character not found",
            operation="characters.update",
            params={"id": character_id},
        )

    fields = validate_payload(payload, operation="characters.update")
    # affected=0 means the row vanished after the pre-check; still a success.
    affected = await gateway.update(CHARACTERS, row_id, fields.model_dump())
    logger.info("character_updated id=%s affected=%s", row_id, affected)


async def delete_character(gateway: PersistenceGateway, character_id: str) -> None:
    row_id = validation.parse_row_id(character_id)
    # Ids no row can hold delete nothing, same as a missing id.
    affected = await gateway.delete(CHARACTERS, row_id) if row_id is not None else 0
    logger.info("character_deleted id=%s affected=%s", character_id, affected)
