"""
Character API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from core.db import PersistenceGateway, get_gateway

from . import service

router = APIRouter()


@router.get("/characters")
async def list_characters(
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> list[dict]:
    """
    Whole table when neither `limit` nor `offset` is given; otherwise a page
    (defaults 10 / 0 for missing or non-numeric values).
    """
    return await service.list_characters(gateway, limit=limit, offset=offset)


@router.get("/characters/search")
async def search_characters(
    name: str | None = Query(default=None),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> list[dict]:
    return await service.search_characters(gateway, name)


@router.post("/characters", status_code=status.HTTP_201_CREATED)
async def create_character(
    payload: dict[str, Any] | None = Body(default=None),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> dict:
    character_id = await service.create_character(gateway, payload)
    return {"message": "Character created successfully", "characterId": character_id}


@router.put("/characters/{character_id}")
async def update_character(
    character_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> dict:
    await service.update_character(gateway, character_id, payload)
    return {"message": "Character updated successfully", "characterId": character_id}


@router.delete("/characters/{character_id}")
async def delete_character(
    character_id: str,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> dict:
    await service.delete_character(gateway, character_id)
    return {"message": "Character deleted successfully", "characterId": character_id}
