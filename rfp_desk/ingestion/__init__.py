"""Inbound proposal ingestion: mailbox poller and proposal builder."""

from rfp_desk.ingestion.poller import MailboxPoller, ScanStats
from rfp_desk.ingestion.proposal_builder import (
    create_proposal_from_email,
    process_incoming_email,
)

__all__ = [
    "MailboxPoller",
    "ScanStats",
    "create_proposal_from_email",
    "process_incoming_email",
]
