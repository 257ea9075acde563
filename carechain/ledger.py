"""In-memory ledger environment: addresses, authorisation, storage, events and time."""

from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass
from typing import Any, Hashable, Iterable


@dataclass(frozen=True, order=True)
class Address:
    """An account identifier on the ledger."""

    value: str

    def __str__(self) -> str:
        return self.value


class AuthorizationError(PermissionError):
    """Raised when an address has not authorised the call that requires it."""

    def __init__(self, address: Address) -> None:
        super().__init__(f"authorization required for {address}")
        self.address = address


@dataclass(frozen=True)
class Event:
    """A published contract event."""

    topics: tuple
    data: Any


class Storage:
    """A key-value store with value semantics: stored values are copied in and out."""

    def __init__(self) -> None:
        self._entries: dict[Hashable, Any] = {}

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return a copy of the value under ``key``, or ``default`` when absent."""
        try:
            value = self._entries[key]
        except KeyError:
            return default
        return copy.deepcopy(value)

    def set(self, key: Hashable, value: Any) -> None:
        """Store a copy of ``value`` under ``key``."""
        self._entries[key] = copy.deepcopy(value)

    def has(self, key: Hashable) -> bool:
        return key in self._entries

    def remove(self, key: Hashable) -> None:
        """Delete ``key`` if present; removing a missing key is not an error."""
        self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class Env:
    """Execution environment shared by the contracts: storage, clock, auth and events."""

    def __init__(self, timestamp: int = 0) -> None:
        self.storage = Storage()
        self.temporary = Storage()
        self.timestamp = 0
        self.set_timestamp(timestamp)
        self.events: list[Event] = []
        self.authorized: list[Address] = []
        self._mock_auths = False
        self._address_ids = itertools.count(1)

    def generate_address(self) -> Address:
        """Return a fresh address that is unique within this environment."""
        return Address(f"addr-{next(self._address_ids):08d}")

    def mock_all_auths(self) -> None:
        """Treat every authorisation request as granted."""
        self._mock_auths = True

    def require_auth(self, address: Address) -> None:
        """Check that ``address`` authorised the current call."""
        if not self._mock_auths:
            raise AuthorizationError(address)
        self.authorized.append(address)

    def set_timestamp(self, timestamp: int) -> None:
        if timestamp < 0:
            raise ValueError("timestamp must not be negative")
        self.timestamp = timestamp

    def publish(self, topics: Iterable[Any], data: Any) -> Event:
        """Record an event and return it."""
        event = Event(tuple(topics), data)
        self.events.append(event)
        return event