"""
Canonical claim model.

A ``Claim`` is the strict, normalized internal representation produced by
``ClaimMapper``. Instances are frozen; code lists are tuples so nothing can
be changed after construction.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from claim_mapper.utils.date_utils import to_utc_midnight


@dataclass(frozen=True, slots=True)
class CoordinationOfBenefits:
    """
    Coordination of Benefits (secondary payer) information.

    Attributes:
        sequence: Payer rank, 1 = primary, 2 = secondary, etc.
        other_payer_id: Other payer's identifier (payer or plan id).
        other_payer_paid_cents: Amount the other payer already paid, in cents.
    """

    sequence: int
    other_payer_id: str | None = None
    other_payer_paid_cents: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "sequence": self.sequence,
            "otherPayerId": self.other_payer_id,
            "otherPayerPaidCents": self.other_payer_paid_cents,
        }


@dataclass(frozen=True, slots=True)
class Claim:
    """
    Normalized medical claim.

    Attributes:
        claim_id: Unique claim identifier from the source.
        member_id: Member/patient identifier.
        provider_npi: Billing provider NPI, 10 digits with a valid checksum.
        cpt_codes: CPT procedure codes, 5 digits each (e.g. '99213').
        icd_codes: ICD-10 diagnosis codes (e.g. 'E11.9').
        date_of_service: Date of service, no time component.
        total_charge_cents: Total charge in cents.
        cob: Optional Coordination of Benefits sub-record.
    """

    claim_id: str
    member_id: str
    provider_npi: str
    cpt_codes: tuple[str, ...]
    icd_codes: tuple[str, ...]
    date_of_service: date
    total_charge_cents: int
    cob: CoordinationOfBenefits | None = None

    @property
    def date_of_service_utc(self) -> datetime:
        """Date of service anchored at midnight UTC."""
        return to_utc_midnight(self.date_of_service)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary using the input field names."""
        return {
            "claimId": self.claim_id,
            "memberId": self.member_id,
            "providerNpi": self.provider_npi,
            "cptCodes": list(self.cpt_codes),
            "icdCodes": list(self.icd_codes),
            "dateOfService": self.date_of_service.isoformat(),
            "totalChargeCents": self.total_charge_cents,
            "cob": self.cob.to_dict() if self.cob else None,
        }
