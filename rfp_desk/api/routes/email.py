"""Email routes: manual reply check and outbound history."""

from typing import Any

from fastapi import APIRouter, Request

from rfp_desk.api.schemas import email_record_to_dict
from rfp_desk.ingestion.poller import NOT_CONFIGURED_MESSAGE
from rfp_desk.models.outputs import CheckResult
from rfp_desk.services import outreach_service

router = APIRouter(prefix="/email", tags=["email"])


@router.post("/check-replies")
async def check_replies(request: Request) -> dict[str, Any]:
    """Scan the mailbox now. Failures are reported in the body with success=false."""
    poller = getattr(request.app.state, "poller", None)
    if poller is None:
        return CheckResult(success=False, message=NOT_CONFIGURED_MESSAGE).model_dump()
    result = await poller.check_now()
    return result.model_dump()


@router.get("/sent")
async def list_sent() -> list[dict[str, Any]]:
    return [email_record_to_dict(r) for r in outreach_service.list_sent_emails()]


@router.get("/sent/rfp/{rfp_id}")
async def list_sent_for_rfp(rfp_id: str) -> list[dict[str, Any]]:
    return [email_record_to_dict(r) for r in outreach_service.list_sent_emails_for_rfp(rfp_id)]
