"""Domain errors raised by services and mapped to HTTP status codes by the API."""


class RfpDeskError(Exception):
    """Base class for application errors."""


class NotFoundError(RfpDeskError):
    """A vendor, RFP or proposal lookup missed."""


class ConflictError(RfpDeskError):
    """A unique constraint (vendor email) would be violated."""


class InvalidRfpError(RfpDeskError):
    """The RFP description is empty or too vague to structure."""


class MailNotConfiguredError(RfpDeskError):
    """SMTP or IMAP credentials are missing."""
