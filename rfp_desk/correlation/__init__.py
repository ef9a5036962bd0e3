"""Inbound reply to RFP correlation."""

from rfp_desk.correlation.correlator import Correlation, correlate, match_by_context
from rfp_desk.correlation.matchers import ID_MATCHERS, first_match

__all__ = [
    "Correlation",
    "correlate",
    "match_by_context",
    "ID_MATCHERS",
    "first_match",
]
