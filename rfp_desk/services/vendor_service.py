"""Vendor directory operations: validation, normalization and uniqueness."""

from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email

from rfp_desk.db.models.procurement import Vendor
from rfp_desk.db.repositories import vendor_repo
from rfp_desk.errors import ConflictError, NotFoundError
from rfp_desk.utils.logger import get_logger

logger = get_logger("rfp_desk.services.vendors")


def normalize_email(addr: str) -> str:
    return (addr or "").strip().lower()


def _validated_email(addr: str) -> str:
    email = normalize_email(addr)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email address: {addr!r}") from e
    return email


def create_vendor(name: str, email: str, metadata: Optional[dict[str, Any]] = None) -> Vendor:
    """Create a vendor. Raises ValueError on a bad address and ConflictError on a duplicate."""
    name = (name or "").strip()
    if not name:
        raise ValueError("Vendor name is required")
    email = _validated_email(email)
    if vendor_repo.get_by_email(email) is not None:
        raise ConflictError(f"Vendor with email {email} already exists")
    vendor = vendor_repo.insert(name=name, email=email, metadata=metadata)
    logger.info("vendors.created", vendor_id=vendor.id, email=email)
    return vendor


def list_vendors() -> list[Vendor]:
    return vendor_repo.list_all()


def get_vendor(vendor_id: str) -> Vendor:
    vendor = vendor_repo.get(vendor_id)
    if vendor is None:
        raise NotFoundError(f"Vendor with ID {vendor_id} not found")
    return vendor


def update_vendor(
    vendor_id: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> Vendor:
    fields: dict[str, Any] = {}
    if name is not None:
        fields["name"] = name.strip()
    if email is not None:
        fields["email"] = _validated_email(email)
        existing = vendor_repo.get_by_email(fields["email"])
        if existing is not None and existing.id != vendor_id:
            raise ConflictError(f"Vendor with email {fields['email']} already exists")
    if metadata is not None:
        fields["metadata_json"] = metadata
    vendor = vendor_repo.update(vendor_id, **fields)
    if vendor is None:
        raise NotFoundError(f"Vendor with ID {vendor_id} not found")
    logger.info("vendors.updated", vendor_id=vendor_id, fields=sorted(fields))
    return vendor


def delete_vendor(vendor_id: str) -> None:
    if not vendor_repo.delete(vendor_id):
        raise NotFoundError(f"Vendor with ID {vendor_id} not found")
    logger.info("vendors.deleted", vendor_id=vendor_id)
