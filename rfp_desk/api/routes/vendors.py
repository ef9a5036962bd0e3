"""Vendor directory routes."""

from typing import Any

from fastapi import APIRouter

from rfp_desk.api.schemas import VendorCreateBody, VendorUpdateBody, vendor_to_dict
from rfp_desk.services import vendor_service

router = APIRouter(prefix="/vendors", tags=["vendors"])


@router.post("", status_code=201)
async def create_vendor(body: VendorCreateBody) -> dict[str, Any]:
    vendor = vendor_service.create_vendor(body.name, body.email, body.metadata)
    return vendor_to_dict(vendor)


@router.get("")
async def list_vendors() -> list[dict[str, Any]]:
    return [vendor_to_dict(v) for v in vendor_service.list_vendors()]


@router.get("/{vendor_id}")
async def get_vendor(vendor_id: str) -> dict[str, Any]:
    return vendor_to_dict(vendor_service.get_vendor(vendor_id))


@router.patch("/{vendor_id}")
async def update_vendor(vendor_id: str, body: VendorUpdateBody) -> dict[str, Any]:
    vendor = vendor_service.update_vendor(vendor_id, name=body.name, email=body.email, metadata=body.metadata)
    return vendor_to_dict(vendor)


@router.delete("/{vendor_id}")
async def delete_vendor(vendor_id: str) -> dict[str, str]:
    vendor_service.delete_vendor(vendor_id)
    return {"status": "deleted", "id": vendor_id}
