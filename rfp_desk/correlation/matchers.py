"""Ordered RFP identifier matchers over a parsed inbound message.

Each matcher reads one field of the message and returns the matched id or None;
first_match runs them in order and stops at the first hit. Order is from most to
least precise:

1. labeled_id       "RFP ID: <36 chars>" anywhere in the source (quoted replies included)
2. subject_bracket  "[<36 chars>]" in the unfolded, decoded subject
3. subject_uuid     any UUID in the subject
4. body_uuid        any UUID in the body; headers such as Message-ID are not searched
"""

import re
from typing import Callable, Optional, Sequence

from rfp_desk.models.email import InboundEmail

UUID_PATTERN = r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"

Matcher = Callable[[InboundEmail], Optional[str]]


def regex_matcher(pattern: str, field: str = "raw") -> Matcher:
    """Match pattern against one InboundEmail field (raw, subject or body); group 1 is the id."""
    compiled = re.compile(pattern, re.IGNORECASE)

    def match(email: InboundEmail) -> Optional[str]:
        m = compiled.search(getattr(email, field) or "")
        return m.group(1) if m else None

    return match


ID_MATCHERS: tuple[tuple[str, Matcher], ...] = (
    ("labeled_id", regex_matcher(r"RFP\s*ID[:\s]+([a-f0-9-]{36})")),
    ("subject_bracket", regex_matcher(r"\[([a-f0-9-]{36})\]", field="subject")),
    ("subject_uuid", regex_matcher(rf"({UUID_PATTERN})", field="subject")),
    ("body_uuid", regex_matcher(rf"({UUID_PATTERN})", field="body")),
)


def first_match(
    email: InboundEmail,
    matchers: Sequence[tuple[str, Matcher]] = ID_MATCHERS,
) -> Optional[tuple[str, str]]:
    """Return (matcher name, matched id) for the first matcher that hits, or None."""
    for name, matcher in matchers:
        found = matcher(email)
        if found:
            return name, found
    return None
