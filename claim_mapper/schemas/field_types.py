"""
Field type definitions for claim mapping.

Names the scalar field kinds that have a dedicated normalizer.
"""

from enum import Enum


class FieldType(str, Enum):
    """
    Field types with a dedicated normalizer.

    Each type maps to one function in ``claim_mapper.schemas.validators``.
    """

    # Medical codes
    CPT_CODE = "cpt_code"
    ICD10_CODE = "icd10_code"
    NPI = "npi"

    # Dates and money
    DATE = "date"
    CURRENCY = "currency"
