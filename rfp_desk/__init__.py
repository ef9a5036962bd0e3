"""RFP Desk: RFP authoring, vendor outreach and inbound proposal ingestion."""

__version__ = "0.1.0"
