"""
Pre-flight checks on a bill configuration.
"""

from typing import List

from .exceptions import ConfigValidationError
from .model import BillConfig, BillType


def validate_bill_config(bill: BillConfig) -> List[str]:
    """
    Check a bill configuration for missing required information.

    Args:
        bill: Bill configuration to check

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    if not (bill.bill_code or "").strip():
        errors.append("Bill code is required")
    if not (bill.bill_name or "").strip():
        errors.append("Bill name is required")
    if not (bill.module or "").strip():
        errors.append("Module is required")
    if not (bill.package_name or "").strip():
        errors.append("Package name is required")

    if not bill.head_fields:
        errors.append("At least one header field is required")

    if bill.bill_type is BillType.MULTI:
        has_body_fields = bool(bill.body_fields) or any(
            bill.body_fields_by_code.values()
        )
        if not has_body_fields:
            errors.append("Multi-body bills need at least one body field")
        if not bill.resolved_body_codes():
            errors.append("Multi-body bills need a body code")

    seen = set()
    for field in bill.head_fields:
        if not field.name:
            errors.append("Header field without a name")
        elif field.name in seen:
            errors.append(f"Duplicate header field: {field.name}")
        seen.add(field.name)

    return errors


def ensure_valid(bill: BillConfig):
    """Raise ConfigValidationError listing every problem found."""
    errors = validate_bill_config(bill)
    if errors:
        raise ConfigValidationError(errors)
