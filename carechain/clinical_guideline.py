"""Clinical-guideline contract: guideline matching, dosing, risk scoring and reminders."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional

from carechain.ledger import Address, Env

_HASH_LENGTH = 32
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_RENAL_IMPAIRMENT_THRESHOLD = 60
_DEFAULT_RENAL_FUNCTION = 100


class GuidelineErrorCode(IntEnum):
    NOT_AUTHORIZED = 1
    GUIDELINE_NOT_FOUND = 2
    INVALID_INPUT = 3


class GuidelineError(Exception):
    """A clinical-guideline operation failed; ``code`` says why."""

    def __init__(self, code: GuidelineErrorCode) -> None:
        super().__init__(code.name)
        self.code = code


@dataclass
class GuidelineRecommendation:
    guideline_id: str
    applicable: bool
    recommendation: str
    strength: str
    evidence_level: str
    alternative_options: list[str] = field(default_factory=list)


@dataclass
class DosageRecommendation:
    medication: str
    recommended_dose: str
    frequency: str
    route: str
    duration: Optional[int]
    renal_adjustment: bool
    monitoring_required: list[str] = field(default_factory=list)


@dataclass
class CarePathway:
    condition: str
    steps: list[str]


def _check_hash(value: bytes, name: str) -> bytes:
    data = bytes(value)
    if len(data) != _HASH_LENGTH:
        raise ValueError(f"{name} must be {_HASH_LENGTH} bytes")
    return data


class ClinicalGuidelineContract:
    """Evaluates registered clinical guidelines and gives simple clinical decision support."""

    def __init__(self, env: Env) -> None:
        self.env = env

    def register_clinical_guideline(
        self,
        admin: Address,
        guideline_id: str,
        condition: str,
        criteria_hash: bytes,
        recommendation_hash: bytes,
        evidence_level: str,
    ) -> None:
        """Register a guideline by storing its criteria hash under its id."""
        self.env.require_auth(admin)
        criteria = _check_hash(criteria_hash, "criteria hash")
        _check_hash(recommendation_hash, "recommendation hash")
        self.env.storage.set(("guideline", guideline_id), criteria)

    def evaluate_guideline(
        self,
        patient_id: Address,
        provider_id: Address,
        guideline_id: str,
        patient_data_hash: bytes,
    ) -> GuidelineRecommendation:
        """Check whether the patient data matches the guideline's criteria."""
        stored = self.env.storage.get(("guideline", guideline_id))
        if stored is None:
            raise GuidelineError(GuidelineErrorCode.GUIDELINE_NOT_FOUND)
        patient_hash = _check_hash(patient_data_hash, "patient data hash")

        return GuidelineRecommendation(
            guideline_id=guideline_id,
            applicable=stored == patient_hash,
            recommendation="Follow Standard Protocol",
            strength="High",
            evidence_level="Level_A",
            alternative_options=[],
        )

    def calculate_drug_dosage(
        self,
        patient_id: Address,
        medication: str,
        weight_grams: int,
        age: int,
        renal_function: Optional[int],
    ) -> DosageRecommendation:
        """Recommend a weight-based dose, flagging renal adjustment below 60."""
        if weight_grams < 0:
            raise ValueError("weight must not be negative")
        renal = _DEFAULT_RENAL_FUNCTION if renal_function is None else renal_function
        return DosageRecommendation(
            medication=medication,
            recommended_dose="5mg/kg",
            frequency="QD",
            route="Oral",
            duration=10,
            renal_adjustment=renal < _RENAL_IMPAIRMENT_THRESHOLD,
            monitoring_required=[],
        )

    def assess_risk_score(
        self,
        patient_id: Address,
        risk_calculator: str,
        input_parameters: Iterable[int],
    ) -> int:
        """Sum the input parameters as a 32-bit signed score."""
        total = 0
        for value in input_parameters:
            total += value
            if not _I32_MIN <= total <= _I32_MAX:
                raise OverflowError("risk score out of 32-bit range")
        return total

    def suggest_care_pathway(
        self,
        patient_id: Address,
        condition: str,
        current_treatment: Iterable[str],
    ) -> CarePathway:
        """Suggest the standard pathway steps for a condition."""
        return CarePathway(condition=condition, steps=["Initial Assessment", "Lab Tests"])

    def create_reminder(
        self,
        patient_id: Address,
        provider_id: Address,
        reminder_type: str,
        due_date: int,
        priority: str,
    ) -> int:
        """Keep the reminder's due date in temporary storage; return the ledger time as its id."""
        self.env.temporary.set(patient_id, due_date)
        return self.env.timestamp

    def check_preventive_care(
        self,
        patient_id: Address,
        age: int,
        gender: str,
        risk_factors: Iterable[str],
    ) -> list[str]:
        """Return the preventive-care alerts due at the patient's age."""
        alerts = []
        if age > 45:
            alerts.append("Cardiac_Screening")
        if age > 18:
            alerts.append("Blood_Pressure_Check")
        return alerts