"""RFP routes: CRUD, regeneration, outbound preview and send."""

from typing import Any

from fastapi import APIRouter

from rfp_desk.api.schemas import RfpBody, SendRfpBody, rfp_to_dict
from rfp_desk.services import outreach_service, rfp_service

router = APIRouter(prefix="/rfps", tags=["rfps"])


@router.post("", status_code=201)
async def create_rfp(body: RfpBody) -> dict[str, Any]:
    """Structure a natural-language request into an RFP."""
    return rfp_to_dict(await rfp_service.create_rfp(body.description))


@router.get("")
async def list_rfps() -> list[dict[str, Any]]:
    return [rfp_to_dict(r) for r in rfp_service.list_rfps()]


@router.get("/{rfp_id}")
async def get_rfp(rfp_id: str) -> dict[str, Any]:
    return rfp_to_dict(rfp_service.get_rfp(rfp_id))


@router.patch("/{rfp_id}")
async def update_rfp(rfp_id: str, body: RfpBody) -> dict[str, Any]:
    return rfp_to_dict(await rfp_service.update_rfp(rfp_id, body.description))


@router.delete("/{rfp_id}")
async def delete_rfp(rfp_id: str) -> dict[str, str]:
    rfp_service.delete_rfp(rfp_id)
    return {"status": "deleted", "id": rfp_id}


@router.post("/{rfp_id}/regenerate")
async def regenerate_rfp(rfp_id: str) -> dict[str, Any]:
    return rfp_to_dict(await rfp_service.regenerate_rfp(rfp_id))


@router.get("/{rfp_id}/email-preview")
async def email_preview(rfp_id: str) -> dict[str, Any]:
    preview = await outreach_service.preview_rfp_email(rfp_id)
    return preview.model_dump()


@router.post("/{rfp_id}/send")
async def send_rfp(rfp_id: str, body: SendRfpBody) -> dict[str, Any]:
    """Email the RFP to each vendor; per-vendor outcomes are returned, not raised."""
    results = await outreach_service.send_rfp_to_vendors(rfp_id, body.vendor_ids)
    return {"rfp_id": rfp_id, "results": [r.model_dump() for r in results]}
