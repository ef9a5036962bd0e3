"""Outbound RFP email: render, preview and send to vendors with per-recipient records."""

import asyncio
from typing import Any, Optional

from rfp_desk.agents.rfp_agent import generate_email_subject
from rfp_desk.db.models.email_record import EmailRecord
from rfp_desk.db.models.procurement import Rfp
from rfp_desk.db.repositories import email_record_repo, vendor_repo
from rfp_desk.errors import MailNotConfiguredError, NotFoundError
from rfp_desk.mail.smtp_sender import SmtpSender
from rfp_desk.models.outputs import EmailPreview, SendResult
from rfp_desk.services.rfp_service import get_rfp
from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.services.outreach")


def format_money(amount: Optional[float], currency: Optional[str] = None) -> str:
    if amount is None:
        return "N/A"
    code = (currency or "USD").upper()
    symbol = "$" if code == "USD" else f"{code} "
    return f"{symbol}{amount:,.2f}"


def render_rfp_email_text(rfp: Rfp) -> str:
    """Plain-text RFP body. The trailing "RFP ID:" line lets replies be matched back."""
    data: dict[str, Any] = rfp.structured_data or {}
    lines = ["Request for Proposal (RFP)", ""]

    if data.get("budget"):
        lines.append(f"Budget: {format_money(data['budget'], data.get('budget_currency'))}")
        if data.get("budget_per_unit"):
            lines.append(f"Budget per unit: {format_money(data['budget_per_unit'], data.get('budget_currency'))}")
        lines.append("")

    items = data.get("items") or []
    if items:
        lines.append("Items Required:")
        for item in items:
            quantity = item.get("quantity")
            if isinstance(quantity, float) and quantity.is_integer():
                quantity = int(quantity)
            lines.append(f"- {item.get('name')} (Quantity: {quantity})")
            if item.get("specifications"):
                lines.append(f"  Specifications: {item['specifications']}")
        lines.append("")

    for key, label in (
        ("delivery_timeline", "Delivery Timeline"),
        ("payment_terms", "Payment Terms"),
        ("warranty", "Warranty Requirements"),
        ("special_requests", "Special Requests"),
    ):
        if data.get(key):
            lines.append(f"{label}: {data[key]}")
            lines.append("")

    lines.append("")
    lines.append("Please reply to this email with your proposal.")
    lines.append(f"RFP ID: {rfp.id}")
    return "\n".join(lines) + "\n"


async def build_subject(rfp: Rfp) -> str:
    """LLM subject (or the default) with the RFP id in brackets so replies keep it."""
    subject = await generate_email_subject(rfp.description_raw)
    return f"{subject} [{rfp.id}]"


async def preview_rfp_email(rfp_id: str) -> EmailPreview:
    rfp = get_rfp(rfp_id)
    return EmailPreview(subject=await build_subject(rfp), text=render_rfp_email_text(rfp))


async def send_rfp_to_vendors(
    rfp_id: str,
    vendor_ids: list[str],
    sender: Optional[SmtpSender] = None,
) -> list[SendResult]:
    """Send the RFP to each vendor. One failed delivery does not stop the others.

    Raises NotFoundError before sending anything if the RFP or any vendor is missing, and
    MailNotConfiguredError if SMTP credentials are absent; no records are written in either case.
    """
    rfp = get_rfp(rfp_id)
    vendors = []
    for vendor_id in vendor_ids:
        vendor = vendor_repo.get(vendor_id)
        if vendor is None:
            raise NotFoundError(f"Vendor with ID {vendor_id} not found")
        vendors.append(vendor)

    sender = sender or SmtpSender()
    if not sender.configured:
        raise MailNotConfiguredError("SMTP credentials are not configured (SMTP_HOST/SMTP_USER/SMTP_PASS)")
    subject = await build_subject(rfp)
    text = render_rfp_email_text(rfp)
    log = logger.bind(rfp_id=rfp.id)

    results: list[SendResult] = []
    for vendor in vendors:
        record = email_record_repo.insert_pending(
            rfp_id=rfp.id,
            vendor_id=vendor.id,
            recipient_email=vendor.email,
            subject=subject,
            email_body=text,
        )
        try:
            await asyncio.to_thread(sender.send, vendor.email, subject, text)
        except Exception as e:
            email_record_repo.mark_failed(record.id, str(e))
            log.error("outreach.send_failed", vendor_id=vendor.id, to=vendor.email, error=str(e))
            results.append(SendResult(vendor_id=vendor.id, success=False, message=str(e)))
            continue
        email_record_repo.mark_sent(record.id)
        log.info("outreach.sent", vendor_id=vendor.id, to=vendor.email)
        results.append(SendResult(vendor_id=vendor.id, success=True, message="Email sent successfully"))
    return results


def list_sent_emails() -> list[EmailRecord]:
    return email_record_repo.list_all()


def list_sent_emails_for_rfp(rfp_id: str) -> list[EmailRecord]:
    return email_record_repo.list_all(rfp_id=get_rfp(rfp_id).id)
