"""Doctor registry contract: profiles keyed by the doctor's wallet."""

from __future__ import annotations

from dataclasses import dataclass

from carechain.ledger import Address, Env


class DoctorProfileExistsError(Exception):
    """A profile already exists for the wallet."""

    def __init__(self, wallet: Address) -> None:
        super().__init__("Doctor profile already exists")
        self.wallet = wallet


class DoctorProfileNotFoundError(LookupError):
    """No profile exists for the wallet."""

    def __init__(self, wallet: Address) -> None:
        super().__init__("Doctor profile not found")
        self.wallet = wallet


@dataclass
class DoctorProfileData:
    name: str
    specialization: str
    institution_wallet: Address
    metadata: str = ""


class DoctorRegistry:
    """Creates, updates and reads doctor profiles."""

    def __init__(self, env: Env) -> None:
        self.env = env

    @staticmethod
    def _key(wallet: Address) -> tuple:
        return ("doctor", wallet)

    def create_doctor_profile(
        self,
        wallet: Address,
        name: str,
        specialization: str,
        institution_wallet: Address,
    ) -> None:
        """Create a profile for the wallet, associated with an institution."""
        self.env.require_auth(wallet)
        key = self._key(wallet)
        if self.env.storage.has(key):
            raise DoctorProfileExistsError(wallet)

        profile = DoctorProfileData(
            name=name,
            specialization=specialization,
            institution_wallet=institution_wallet,
            metadata="",
        )
        self.env.storage.set(key, profile)
        self.env.publish(("crt_doc", wallet), "success")

    def update_doctor_profile(self, wallet: Address, specialization: str, metadata: str) -> None:
        """Replace the profile's specialization and metadata."""
        self.env.require_auth(wallet)
        profile = self.get_doctor_profile(wallet)
        profile.specialization = specialization
        profile.metadata = metadata
        self.env.storage.set(self._key(wallet), profile)
        self.env.publish(("upd_doc", wallet), "success")

    def get_doctor_profile(self, wallet: Address) -> DoctorProfileData:
        profile = self.env.storage.get(self._key(wallet))
        if profile is None:
            raise DoctorProfileNotFoundError(wallet)
        return profile