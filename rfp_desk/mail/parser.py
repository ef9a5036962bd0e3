"""Parse raw RFC-822 message source into sender, subject and plain-text body."""

import re
from email.header import decode_header, make_header

from rfp_desk.models.email import InboundEmail

_SUBJECT_RE = re.compile(r"^Subject:[ \t]*(.+)", re.IGNORECASE | re.MULTILINE)
# "From: Name <addr>" or "From: addr"
_FROM_RE = re.compile(r"^From:[^\n]*?<([^>\n]+)>|^From:[ \t]*([^\s<]+)", re.IGNORECASE | re.MULTILINE)
# First text/plain part: skip its headers up to the blank line, stop at the next boundary or part
_PLAIN_BODY_RE = re.compile(
    r"Content-Type:[ \t]*text/plain\b.*?\n\n(.*?)(?=\n--|\nContent-Type:|\Z)",
    re.IGNORECASE | re.DOTALL,
)
# A line break followed by whitespace continues the previous header line
_FOLD_RE = re.compile(r"\n(?=[ \t])")


def normalize_newlines(raw: str) -> str:
    return raw.replace("\r\n", "\n").replace("\r", "\n")


def split_headers(text: str) -> tuple[str, str]:
    """Split at the first blank line into (header block, body). No blank line: all headers."""
    headers, sep, body = text.partition("\n\n")
    return headers, body if sep else ""


def unfold_headers(text: str) -> str:
    """Join folded top-level header lines; the body is left untouched."""
    headers, sep, body = text.partition("\n\n")
    return _FOLD_RE.sub("", headers) + sep + body


def _decode_header(value: str) -> str:
    """Decode RFC 2047 encoded-words; return the input unchanged if it is malformed."""
    try:
        return str(make_header(decode_header(value)))
    except (ValueError, LookupError):
        return value


def extract_subject(raw: str) -> str:
    m = _SUBJECT_RE.search(split_headers(raw)[0])
    return _decode_header(m.group(1).strip()) if m else ""


def extract_sender(raw: str) -> str | None:
    """Sender address lowercased and trimmed (the vendor directory's stored form), or None."""
    m = _FROM_RE.search(split_headers(raw)[0])
    if not m:
        return None
    address = (m.group(1) or m.group(2) or "").strip().lower()
    return address or None


def extract_body(raw: str) -> str:
    """First text/plain part; otherwise everything after the header block."""
    m = _PLAIN_BODY_RE.search(raw)
    if m:
        return m.group(1).strip()
    _, sep, rest = raw.partition("\n\n")
    return rest.strip() if sep else raw.strip()


def parse_raw_email(raw: str) -> InboundEmail:
    """raw on the result is the newline-normalized source with top-level headers unfolded."""
    text = unfold_headers(normalize_newlines(raw))
    return InboundEmail(
        sender=extract_sender(text),
        subject=extract_subject(text),
        body=extract_body(text),
        raw=text,
    )
