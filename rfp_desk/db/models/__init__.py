"""Re-export all ORM models so Base.metadata has all tables."""

from rfp_desk.db.models.email_record import EmailRecord
from rfp_desk.db.models.procurement import Rfp, Vendor
from rfp_desk.db.models.proposal import Proposal

__all__ = [
    "Vendor",
    "Rfp",
    "EmailRecord",
    "Proposal",
]
