"""
Claim mapper.

Maps one loosely-structured input record into a strict, normalized
``Claim``: validates CPT (Current Procedural Terminology) and ICD-10
(International Classification of Diseases) codes, the provider NPI
(National Provider Identifier), the date of service, money amounts and the
optional COB (Coordination of Benefits) block.
"""

from collections.abc import Callable, Mapping
from typing import Any

from claim_mapper.config import get_logger, get_settings
from claim_mapper.config.settings import RoundingPolicy
from claim_mapper.exceptions import ClaimMappingError, InvalidCodeError, TypeMismatchError
from claim_mapper.mapping.extractors import parse_cob, parse_codes, require_string
from claim_mapper.mapping.logger import ClaimLogger, get_default_logger
from claim_mapper.schemas.claim import Claim
from claim_mapper.schemas.validators import (
    normalize_cpt_code,
    normalize_icd10_code,
    normalize_npi,
    parse_date_to_utc_midnight,
    parse_money_to_cents,
)


logger = get_logger(__name__)


class ClaimMapper:
    """
    Converts raw claim records into ``Claim`` instances.

    Fatal defects raise a ``ClaimMappingError`` subclass and no claim is
    produced. Recoverable defects are reported through ``logger.warn`` and
    the mapping continues with a degraded value.

    The mapper holds no per-record state, so one instance can be shared
    between threads as long as its logger is thread-safe.
    """

    def __init__(
        self,
        logger: ClaimLogger | None = None,
        rounding: RoundingPolicy | str | None = None,
    ) -> None:
        """
        Initialize the mapper.

        Args:
            logger: Receives warnings for recoverable defects. Defaults to
                the ``MAPPING_LOGGER_BACKEND`` setting (a NoopLogger unless set).
            rounding: Half-cent tie-break rule. Defaults to the
                ``MAPPING_MONEY_ROUNDING`` setting.
        """
        self.logger: ClaimLogger = logger if logger is not None else get_default_logger()
        self.rounding = RoundingPolicy(rounding or get_settings().mapping.money_rounding)

    def map(self, raw: Mapping[str, Any]) -> Claim:
        """
        Convert one raw record into a normalized Claim.

        Args:
            raw: Untyped mapping with claimId, memberId, providerNpi,
                cptCodes, icdCodes, dateOfService, totalCharge and an
                optional cob block.

        Returns:
            Fully populated Claim.

        Raises:
            ClaimMappingError: On the first fatal defect.
        """
        if not isinstance(raw, Mapping):
            raise TypeMismatchError("claim", "Map", raw)

        try:
            claim = self._map(raw)
        except ClaimMappingError as exc:
            logger.debug("claim_mapping_rejected", kind=exc.kind.value, field=exc.field)
            raise

        logger.debug(
            "claim_mapped",
            cpt_count=len(claim.cpt_codes),
            icd_count=len(claim.icd_codes),
            has_cob=claim.cob is not None,
        )
        return claim

    def _map(self, raw: Mapping[str, Any]) -> Claim:
        claim_id = require_string(raw, "claimId").resolve(self.logger)
        member_id = require_string(raw, "memberId").resolve(self.logger)

        # NPI: 10 digits with a Luhn checksum
        provider_npi = normalize_npi(require_string(raw, "providerNpi").resolve(self.logger))

        # Codes: ["99213", "97110"] or "99213, 97110"; at least one of each
        cpt_codes = self._map_codes(raw.get("cptCodes"), "cptCodes", "CPT", normalize_cpt_code)
        icd_codes = self._map_codes(raw.get("icdCodes"), "icdCodes", "ICD", normalize_icd10_code)

        date_of_service = parse_date_to_utc_midnight(
            require_string(raw, "dateOfService").resolve(self.logger), "dateOfService"
        )

        total_charge_cents = parse_money_to_cents(
            raw.get("totalCharge"), "totalCharge", self.rounding
        )

        cob = parse_cob(raw.get("cob"), self.rounding).resolve(self.logger)

        return Claim(
            claim_id=claim_id,
            member_id=member_id,
            provider_npi=provider_npi,
            cpt_codes=cpt_codes,
            icd_codes=icd_codes,
            date_of_service=date_of_service,
            total_charge_cents=total_charge_cents,
            cob=cob,
        )

    def _map_codes(
        self,
        raw: Any,
        field: str,
        code_type: str,
        normalize: Callable[[str, str], str],
    ) -> tuple[str, ...]:
        candidates = parse_codes(raw, field).resolve(self.logger)
        codes = tuple(normalize(candidate, field) for candidate in candidates)
        if not codes:
            raise InvalidCodeError(code_type, "<empty>", context={"field": field}, field_name=field)
        return codes


def map_claim(raw: Mapping[str, Any], logger: ClaimLogger | None = None) -> Claim:
    """
    Map one raw record with a one-off ClaimMapper.

    Args:
        raw: Untyped claim record.
        logger: Receives warnings for recoverable defects.

    Returns:
        Normalized Claim.
    """
    return ClaimMapper(logger=logger).map(raw)
