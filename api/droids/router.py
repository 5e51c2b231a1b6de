"""
Droid API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from core.db import PersistenceGateway, get_gateway

from . import service

router = APIRouter()


@router.get("/droids")
async def list_droids(
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> list[dict]:
    return await service.list_droids(gateway, limit=limit, offset=offset)


@router.post("/droids", status_code=status.HTTP_201_CREATED)
async def create_droid(
    payload: dict[str, Any] | None = Body(default=None),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> dict:
    droid_id = await service.create_droid(gateway, payload)
    return {"message": "Droid created successfully", "droidId": droid_id}


@router.put("/droids/{droid_id}")
async def update_droid(
    droid_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> dict:
    await service.update_droid(gateway, droid_id, payload)
    return {"message": "Droid updated successfully", "droidId": droid_id}


@router.delete("/droids/{droid_id}")
async def delete_droid(
    droid_id: str,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> dict:
    await service.delete_droid(gateway, droid_id)
    return {"message": "Droid deleted successfully", "droidId": droid_id}
