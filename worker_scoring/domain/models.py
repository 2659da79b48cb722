"""Core domain models for scoring requests.

This module defines the request-scoped value objects parsed from the
inbound JSON body:
- Job: licensure codes a job requires and its jurisdiction
- Worker: licensure codes a worker holds and the jurisdictions they cover
- Selector: a weighted matching criterion
- BestWorkerPayload: one job, one worker and an ordered list of selectors

Property names are matched case-insensitively and unknown properties are
ignored, so ``{"JurisdictionId": "CA"}`` and ``{"jurisdictionid": "CA"}``
populate the same field.
"""

from typing import Any, Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, field_validator, model_validator

from worker_scoring.utils.codes import join_codes, split_codes

# Selector integers are 32-bit signed
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class CaseInsensitiveModel(BaseModel):
    """Frozen model whose input keys are matched case-insensitively.

    Keys are resolved against the wire name of each field: its alias, or the
    field name when it has no alias. When the same field appears more than
    once with different casing, the last occurrence wins. Keys that resolve
    to no field (including Python names of aliased fields) are dropped.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def match_keys_case_insensitively(cls, data: Any) -> Any:
        """Rewrite incoming keys to canonical field names."""
        if not isinstance(data, dict):
            return data

        lookup: Dict[str, str] = {}
        for name, field_info in cls.model_fields.items():
            lookup[(field_info.alias or name).lower()] = name

        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            field_name = lookup.get(key.lower())
            if field_name is not None:
                normalized[field_name] = value
        return normalized


def _coerce_codes(value: Any) -> Any:
    """Accept codes as a string, a list of strings, or null."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)) and all(isinstance(code, str) for code in value):
        return join_codes(value)
    return value


class Job(CaseInsensitiveModel):
    """Job being staffed.

    ``certification_id`` is a comma-separated list of licensure codes the job
    accepts; ``jurisdiction_id`` is a single jurisdiction code.
    """

    certification_id: str = Field(
        "", alias="certificationId", description="Comma-separated licensure codes required"
    )
    jurisdiction_id: str = Field("", alias="jurisdictionId", description="Jurisdiction code")
    high_priority: StrictBool = Field(False, alias="highPriority", description="Carried, unused")

    @field_validator("certification_id", "jurisdiction_id", mode="before")
    @classmethod
    def coerce_codes(cls, v: Any) -> Any:
        """Join list-form codes and treat null as empty."""
        return _coerce_codes(v)

    @property
    def licensures(self) -> FrozenSet[str]:
        """Licensure codes as a set."""
        return split_codes(self.certification_id)

    model_config = ConfigDict(json_schema_extra={"example": {
        "certificationId": "RN",
        "jurisdictionId": "CA",
    }})


class Worker(CaseInsensitiveModel):
    """Worker being considered for a job."""

    id: Optional[str] = Field(None, description="Worker identifier (unused in scoring)")
    certification_ids: str = Field(
        "", alias="certificationIds", description="Comma-separated licensure codes held"
    )
    jurisdiction_ids: str = Field(
        "", alias="jurisdictionIds", description="Comma-separated jurisdictions covered"
    )
    high_priority: StrictBool = Field(False, alias="highPriority", description="Carried, unused")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Keep numeric ids as text; ids of any other type are dropped."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return None

    @field_validator("certification_ids", "jurisdiction_ids", mode="before")
    @classmethod
    def coerce_codes(cls, v: Any) -> Any:
        """Join list-form codes and treat null as empty."""
        return _coerce_codes(v)

    @property
    def licensures(self) -> FrozenSet[str]:
        """Licensure codes as a set."""
        return split_codes(self.certification_ids)

    @property
    def jurisdictions(self) -> FrozenSet[str]:
        """Jurisdiction codes as a set."""
        return split_codes(self.jurisdiction_ids)

    model_config = ConfigDict(json_schema_extra={"example": {
        "id": "worker-42",
        "certificationIds": "RN,LPN",
        "jurisdictionIds": "CA,NV",
    }})


class Selector(CaseInsensitiveModel):
    """Weighted matching criterion.

    ``key`` and ``operator`` are kept as sent; the scoring engine compares them
    case-insensitively and ignores values it does not recognize. ``value`` is
    always counted toward the required score, even for unrecognized keys.
    """

    key: str = Field("", description="licensure or jurisdiction")
    operator: str = Field("", description="equals, notequals or greaterthanequal")
    value: StrictInt = Field(0, ge=INT32_MIN, le=INT32_MAX, description="Weight and threshold")
    expires_after_seconds: Optional[StrictInt] = Field(
        None, alias="expiresAfterSeconds", ge=INT32_MIN, le=INT32_MAX, description="Carried, unused"
    )

    @field_validator("key", "operator", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        """Treat null key/operator as empty."""
        return "" if v is None else v

    model_config = ConfigDict(json_schema_extra={"example": {
        "key": "licensure",
        "operator": "equals",
        "value": 5,
        "expiresAfterSeconds": 3600,
    }})


class BestWorkerPayload(CaseInsensitiveModel):
    """Scoring request: one job, one worker, zero or more selectors.

    ``job`` and ``worker`` are optional at the model level so that an absent
    object can be reported separately from a malformed one; see
    ``parse_payload``.
    """

    job: Optional[Job] = None
    worker: Optional[Worker] = None
    selectors: Tuple[Selector, ...] = Field(default_factory=tuple)

    @field_validator("selectors", mode="before")
    @classmethod
    def null_selectors_as_empty(cls, v: Any) -> Any:
        """Treat null selectors as an empty sequence."""
        return () if v is None else v

    @property
    def is_complete(self) -> bool:
        """True when both job and worker are present."""
        return self.job is not None and self.worker is not None
