"""Per-browser key/value storage backing session and theme state."""

import hashlib
import hmac
import secrets
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


class ClientStorage(Protocol):
    """Interface for a single browser's persisted values."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value under a key."""

    def remove(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class InMemoryClientStorage(ClientStorage):
    """Dict-backed client storage."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass
class _PendingClientStorage(InMemoryClientStorage):
    """Storage for a client with nothing saved yet; registered on first write."""

    adopt: Callable[[InMemoryClientStorage], InMemoryClientStorage] | None = None

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        if self.adopt is not None:
            self.adopt(self)
            self.adopt = None


DEFAULT_CLIENT_LIMIT = 10_000


@dataclass
class ClientStorageRegistry:
    """Issues signed client ids and keeps storage for recently active clients.

    Ids are verified by signature, so issuing or reading keeps nothing in
    memory. Storage exists only for clients that saved a value, and past
    ``max_clients`` the least recently used one is forgotten.
    """

    max_clients: int = DEFAULT_CLIENT_LIMIT
    _secret: bytes = field(
        default_factory=lambda: secrets.token_bytes(32), repr=False
    )
    _storages: OrderedDict[str, InMemoryClientStorage] = field(
        default_factory=OrderedDict
    )

    def issue(self) -> str:
        """Return a fresh signed client id."""
        token = secrets.token_urlsafe(24)
        return f"{token}.{self._sign(token)}"

    def is_issued(self, client_id: str | None) -> bool:
        """Return True only for ids signed by this registry."""
        if not client_id:
            return False
        token, _, signature = client_id.rpartition(".")
        return bool(token) and hmac.compare_digest(signature, self._sign(token))

    def get(self, client_id: str) -> InMemoryClientStorage:
        """Return storage for a client.

        Unknown ids get empty storage that is retained only once written to,
        and only when the id was issued here.
        """
        storage = self._storages.get(client_id)
        if storage is not None:
            self._storages.move_to_end(client_id)
            return storage
        if not self.is_issued(client_id):
            return InMemoryClientStorage()
        return _PendingClientStorage(
            adopt=lambda pending: self._adopt(client_id, pending)
        )

    def __len__(self) -> int:
        return len(self._storages)

    def _adopt(
        self, client_id: str, pending: InMemoryClientStorage
    ) -> InMemoryClientStorage:
        current = self._storages.get(client_id)
        if current is not None:
            current.values.update(pending.values)
            pending.values = current.values
            return current
        self._storages[client_id] = pending
        while len(self._storages) > self.max_clients:
            self._storages.popitem(last=False)
        return pending

    def _sign(self, token: str) -> str:
        digest = hmac.new(self._secret, token.encode(), hashlib.sha256)
        return digest.hexdigest()[:32]
