"""Emergency medical information contract: profiles, alerts, break-glass access and DNR orders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from carechain.ledger import Address, Env

_HASH_LENGTH = 32


class EmergencyProfileNotFoundError(LookupError):
    """No emergency profile exists for the patient."""

    def __init__(self, patient_id: Address) -> None:
        super().__init__("Emergency profile not found")
        self.patient_id = patient_id


def _check_hash(value: bytes, name: str) -> bytes:
    data = bytes(value)
    if len(data) != _HASH_LENGTH:
        raise ValueError(f"{name} must be {_HASH_LENGTH} bytes")
    return data


@dataclass
class EmergencyContact:
    name: str
    relationship: str
    contact_hash: bytes  # encrypted contact details
    priority: int


@dataclass
class EmergencyProfile:
    blood_type: str
    critical_allergies: list[str]
    active_conditions: list[str]
    current_medications: list[str]
    dnr_status: bool
    emergency_contacts: list[EmergencyContact] = field(default_factory=list)


@dataclass
class CriticalAlert:
    provider_id: Address
    alert_type: str
    alert_text: str
    severity: str
    timestamp: int


@dataclass
class EmergencyAccessLog:
    provider_id: Address
    emergency_type: str
    justification: str
    location: str
    access_time: int


@dataclass
class DNROrder:
    provider_id: Address
    dnr_document_hash: bytes
    effective_date: int
    recorded_at: int


class EmergencyMedicalInfo:
    """Keeps emergency profiles and records every emergency access to them."""

    def __init__(self, env: Env) -> None:
        self.env = env

    @staticmethod
    def _profile_key(patient_id: Address) -> tuple:
        return ("emergency_profile", patient_id)

    @staticmethod
    def _alerts_key(patient_id: Address) -> tuple:
        return ("critical_alerts", patient_id)

    @staticmethod
    def _access_log_key(patient_id: Address) -> tuple:
        return ("emergency_access_log", patient_id)

    @staticmethod
    def _dnr_key(patient_id: Address) -> tuple:
        return ("dnr_order", patient_id)

    @staticmethod
    def _notifications_key(patient_id: Address) -> tuple:
        return ("emergency_notifications", patient_id)

    def _load_profile(self, patient_id: Address) -> EmergencyProfile:
        profile = self.env.storage.get(self._profile_key(patient_id))
        if profile is None:
            raise EmergencyProfileNotFoundError(patient_id)
        return profile

    def _append(self, key: tuple, item: object) -> None:
        items = self.env.storage.get(key, [])
        items.append(item)
        self.env.storage.set(key, items)

    def set_emergency_profile(
        self,
        patient_id: Address,
        blood_type: str,
        allergies_summary: str,
        critical_conditions: Iterable[str],
        current_medications: Iterable[str],
        emergency_contacts: Iterable[EmergencyContact],
        advance_directives_hash: Optional[bytes],
    ) -> None:
        """Set or replace the patient's profile; advance directives are kept as a DNR order."""
        self.env.require_auth(patient_id)
        directives = (
            None
            if advance_directives_hash is None
            else _check_hash(advance_directives_hash, "advance directives hash")
        )

        profile = EmergencyProfile(
            blood_type=blood_type,
            critical_allergies=[allergies_summary],
            active_conditions=list(critical_conditions),
            current_medications=list(current_medications),
            dnr_status=False,
            emergency_contacts=list(emergency_contacts),
        )
        self.env.storage.set(self._profile_key(patient_id), profile)

        if directives is not None:
            now = self.env.timestamp
            dnr = DNROrder(
                provider_id=patient_id,
                dnr_document_hash=directives,
                effective_date=now,
                recorded_at=now,
            )
            self.env.storage.set(self._dnr_key(patient_id), dnr)

    def add_critical_alert(
        self,
        patient_id: Address,
        provider_id: Address,
        alert_type: str,
        alert_text: str,
        severity: str,
    ) -> None:
        """Append a critical alert to the patient's record."""
        self.env.require_auth(provider_id)
        alert = CriticalAlert(
            provider_id=provider_id,
            alert_type=alert_type,
            alert_text=alert_text,
            severity=severity,
            timestamp=self.env.timestamp,
        )
        self._append(self._alerts_key(patient_id), alert)

    def emergency_access_request(
        self,
        provider_id: Address,
        patient_id: Address,
        emergency_type: str,
        justification: str,
        location: str,
    ) -> EmergencyProfile:
        """Break-glass access: log the access and return the patient's profile."""
        self.env.require_auth(provider_id)
        # A failed request leaves no trace, so the profile is looked up before logging.
        profile = self._load_profile(patient_id)

        log = EmergencyAccessLog(
            provider_id=provider_id,
            emergency_type=emergency_type,
            justification=justification,
            location=location,
            access_time=self.env.timestamp,
        )
        self._append(self._access_log_key(patient_id), log)
        return profile

    def notify_emergency_contacts(
        self,
        patient_id: Address,
        emergency_type: str,
        notification_time: int,
    ) -> list[EmergencyContact]:
        """Log a notification and return the contacts to notify."""
        profile = self._load_profile(patient_id)
        self._append(self._notifications_key(patient_id), (emergency_type, notification_time))
        return profile.emergency_contacts

    def record_dnr_order(
        self,
        patient_id: Address,
        provider_id: Address,
        dnr_document_hash: bytes,
        effective_date: int,
    ) -> None:
        """Record a DNR order and flag the patient's profile, if there is one."""
        self.env.require_auth(provider_id)
        document_hash = _check_hash(dnr_document_hash, "DNR document hash")

        dnr = DNROrder(
            provider_id=provider_id,
            dnr_document_hash=document_hash,
            effective_date=effective_date,
            recorded_at=self.env.timestamp,
        )
        self.env.storage.set(self._dnr_key(patient_id), dnr)

        profile_key = self._profile_key(patient_id)
        profile = self.env.storage.get(profile_key)
        if profile is not None:
            profile.dnr_status = True
            self.env.storage.set(profile_key, profile)

    def get_emergency_info(self, patient_id: Address, requester: Address) -> EmergencyProfile:
        self.env.require_auth(requester)
        return self._load_profile(patient_id)

    def get_critical_alerts(self, patient_id: Address) -> list[CriticalAlert]:
        return self.env.storage.get(self._alerts_key(patient_id), [])

    def get_emergency_access_logs(self, patient_id: Address) -> list[EmergencyAccessLog]:
        """Return the audit trail of emergency accesses, oldest first."""
        return self.env.storage.get(self._access_log_key(patient_id), [])

    def get_dnr_order(self, patient_id: Address) -> Optional[DNROrder]:
        return self.env.storage.get(self._dnr_key(patient_id))

    def has_emergency_profile(self, patient_id: Address) -> bool:
        return self.env.storage.has(self._profile_key(patient_id))