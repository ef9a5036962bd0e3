"""Inbound email models."""

from typing import Optional

from pydantic import BaseModel


class InboundEmail(BaseModel):
    """Fields pulled from a raw RFC-822 source. raw keeps the full decoded text for id matching."""

    sender: Optional[str] = None
    subject: str = ""
    body: str = ""
    raw: str = ""
