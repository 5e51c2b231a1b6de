"""
Droid business logic.

Unlike characters, listing is always paginated and there is no numeric or
digit rule: all three fields just have to be non-empty strings.
"""

from __future__ import annotations

import logging
from typing import Any

from core import config, validation
from core.db import PersistenceGateway, Table
from core.errors import NotFoundError

from . import schemas

logger = logging.getLogger(__name__)

DROIDS = Table(name="droids", columns=("name", "description", "belongs"))

REQUIRED_FIELDS = ("name", "description", "belongs")


def validate_payload(payload: dict[str, Any] | None, *, operation: str) -> schemas.DroidFields:
    payload = payload or {}
    validation.require_fields(
        payload,
        REQUIRED_FIELDS,
        "Name, description, and belongs are required fields",
        operation=operation,
    )
    validation.require_strings(
        payload,
        REQUIRED_FIELDS,
        "Name, description, and belongs must be strings",
        operation=operation,
    )
    return schemas.DroidFields(
        name=payload["name"],
        description=payload["description"],
        belongs=payload["belongs"],
    )


async def list_droids(
    gateway: PersistenceGateway,
    *,
    limit: str | None = None,
    offset: str | None = None,
) -> list[dict]:
    return await gateway.list_rows(
        DROIDS,
        limit=validation.parse_int_or_default(limit, config.PAGINATION_DEFAULTS["limit"]),
        offset=validation.parse_int_or_default(offset, config.PAGINATION_DEFAULTS["offset"]),
    )


async def create_droid(gateway: PersistenceGateway, payload: dict[str, Any] | None) -> int:
    fields = validate_payload(payload, operation="droids.create")
    droid_id = await gateway.insert(DROIDS, fields.model_dump())
    logger.info("droid_created id=%s", droid_id)
    return droid_id


async def update_droid(gateway: PersistenceGateway, droid_id: str, payload: dict[str, Any] | None) -> None:
    row_id = validation.parse_row_id(droid_id)
    existing = await gateway.get_by_id(DROIDS, row_id) if row_id is not None else None
    if existing is None:
        raise NotFoundError("Droid not found", operation="droids.update", params={"id": droid_id})

    fields = validate_payload(payload, operation="droids.update")
    affected = await gateway.update(DROIDS, row_id, fields.model_dump())
    logger.info("droid_updated id=%s affected=%s", row_id, affected)


async def delete_droid(gateway: PersistenceGateway, droid_id: str) -> None:
    row_id = validation.parse_row_id(droid_id)
    affected = await gateway.delete(DROIDS, row_id) if row_id is not None else 0
    logger.info("droid_deleted id=%s affected=%s", droid_id, affected)
