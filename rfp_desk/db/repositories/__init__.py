"""DB repositories: sync module functions returning detached ORM rows."""

from rfp_desk.db.repositories import (
    email_record_repo,
    proposal_repo,
    rfp_repo,
    vendor_repo,
)

__all__ = [
    "email_record_repo",
    "proposal_repo",
    "rfp_repo",
    "vendor_repo",
]
