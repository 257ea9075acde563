"""Financial-records contract: owner-held records with delegated read access."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterator

from carechain.ledger import Address, Env


class AccessDeniedError(PermissionError):
    """The caller is neither the owner nor granted access by the owner."""

    def __init__(self) -> None:
        super().__init__("Access denied")


class RecordType(IntEnum):
    TAX_DOCUMENT = 0
    INVOICE = 1
    RECEIPT = 2
    BANK_STATEMENT = 3
    OTHER = 4


@dataclass
class FinancialRecord:
    owner: Address
    record_type: RecordType
    ipfs_hash: str
    timestamp: int
    description: str


class FinancialRecordContract:
    """Stores financial records per owner and controls who may read them."""

    def __init__(self, env: Env) -> None:
        self.env = env

    @staticmethod
    def _count_key(owner: Address) -> tuple:
        return ("record_count", owner)

    @staticmethod
    def _record_key(owner: Address, index: int) -> tuple:
        return ("record", owner, index)

    @staticmethod
    def _access_key(owner: Address, authorized: Address) -> tuple:
        return ("access", owner, authorized)

    def _check_access(self, caller: Address, owner: Address) -> None:
        if caller == owner:
            return
        if not self.env.storage.get(self._access_key(owner, caller), False):
            raise AccessDeniedError()

    def _records(self, owner: Address) -> Iterator[FinancialRecord]:
        count = self.env.storage.get(self._count_key(owner), 0)
        for index in range(count):
            record = self.env.storage.get(self._record_key(owner, index))
            if record is not None:
                yield record

    def _select(
        self, caller: Address, owner: Address, keep: Callable[[FinancialRecord], bool]
    ) -> list[FinancialRecord]:
        self._check_access(caller, owner)
        return [record for record in self._records(owner) if keep(record)]

    def add_financial_record(
        self,
        owner: Address,
        record_type: RecordType,
        ipfs_hash: str,
        description: str,
    ) -> None:
        """Append a record for the owner, stamped with the ledger time."""
        self.env.require_auth(owner)
        count = self.env.storage.get(self._count_key(owner), 0)
        record = FinancialRecord(
            owner=owner,
            record_type=RecordType(record_type),
            ipfs_hash=ipfs_hash,
            timestamp=self.env.timestamp,
            description=description,
        )
        self.env.storage.set(self._record_key(owner, count), record)
        self.env.storage.set(self._count_key(owner), count + 1)

    def get_financial_records(self, caller: Address, owner: Address) -> list[FinancialRecord]:
        """Return all of the owner's records in the order they were added."""
        return self._select(caller, owner, lambda record: True)

    def get_records_by_date_range(
        self, caller: Address, owner: Address, start: int, end: int
    ) -> list[FinancialRecord]:
        """Return the records whose timestamp lies in ``[start, end]``."""
        return self._select(caller, owner, lambda record: start <= record.timestamp <= end)

    def get_records_by_type(
        self, caller: Address, owner: Address, record_type: RecordType
    ) -> list[FinancialRecord]:
        return self._select(caller, owner, lambda record: record.record_type == record_type)

    def grant_access(self, owner: Address, authorized: Address) -> None:
        self.env.require_auth(owner)
        self.env.storage.set(self._access_key(owner, authorized), True)

    def revoke_access(self, owner: Address, authorized: Address) -> None:
        self.env.require_auth(owner)
        self.env.storage.remove(self._access_key(owner, authorized))