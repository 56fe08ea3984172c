"""Per-channel account store.

This is the only component allowed to persist accounts. Records live as
JSON in a byte-keyed :class:`Storage` under a single namespace, so the
store works the same on top of an in-process dict or a host-provided
key/value backend.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterator
from typing import Protocol

from pydantic import ValidationError

from ibcgamm._constants import ACCOUNTS_NAMESPACE
from ibcgamm.exceptions import AccountNotFoundError, DecodeError
from ibcgamm.models._base import GammBaseModel
from ibcgamm.models.messages import AccountInfo, AccountResponse


class Account(GammBaseModel):
    """Cached view of the counterparty's last known answers on one channel.

    ``last_update_time`` is in nanoseconds; ``0`` means never updated.
    Empty strings mean no value has been observed yet.
    """

    last_update_time: int = 0
    remote_spot_price: str = ""
    remote_swap_amount: str = ""
    remote_balance: str = ""
    remote_address: str = ""

    def to_response(self) -> AccountResponse:
        return AccountResponse(**self.model_dump())

    def to_info(self, channel_id: str) -> AccountInfo:
        return AccountInfo(channel_id=channel_id, **self.model_dump())


class Storage(Protocol):
    """Byte-keyed storage backend."""

    def get(self, key: bytes) -> bytes | None: ...

    def set(self, key: bytes, value: bytes) -> None: ...

    def remove(self, key: bytes) -> None: ...

    def scan(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        """Yield every entry whose key starts with *prefix*, ascending by key."""
        ...


class MemoryStorage:
    """In-process :class:`Storage`."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        self._data[key] = value

    def remove(self, key: bytes) -> None:
        self._data.pop(key, None)

    def scan(self, prefix: bytes) -> Iterator[tuple[bytes, bytes]]:
        # Snapshot the keys so callers may write while iterating.
        for key in sorted(k for k in self._data if k.startswith(prefix)):
            value = self._data.get(key)
            if value is not None:
                yield key, value

    def __len__(self) -> int:
        return len(self._data)


def _namespace_prefix(namespace: str) -> bytes:
    raw = namespace.encode()
    return len(raw).to_bytes(2, "big") + raw


class AccountStore:
    """Mapping from channel id to :class:`Account`.

    Every write made inside :meth:`transaction` is undone if the block
    raises, which lets one event either commit all of its writes or none.
    """

    def __init__(self, storage: Storage | None = None, *, namespace: str = ACCOUNTS_NAMESPACE) -> None:
        self._storage: Storage = storage if storage is not None else MemoryStorage()
        self._prefix = _namespace_prefix(namespace)
        self._journal: dict[bytes, bytes | None] | None = None

    def _key(self, channel_id: str) -> bytes:
        return self._prefix + channel_id.encode()

    def _decode(self, channel_id: str, raw: bytes) -> Account:
        try:
            return Account.model_validate_json(raw)
        except ValidationError as exc:
            raise DecodeError(f"stored account for {channel_id} is corrupt: {exc}", what="account") from exc

    def _write(self, key: bytes, value: bytes | None) -> None:
        if self._journal is not None and key not in self._journal:
            self._journal[key] = self._storage.get(key)
        if value is None:
            self._storage.remove(key)
        else:
            self._storage.set(key, value)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def exists(self, channel_id: str) -> bool:
        return self._storage.get(self._key(channel_id)) is not None

    def may_load(self, channel_id: str) -> Account | None:
        raw = self._storage.get(self._key(channel_id))
        if raw is None:
            return None
        return self._decode(channel_id, raw)

    def load(self, channel_id: str) -> Account:
        account = self.may_load(channel_id)
        if account is None:
            raise AccountNotFoundError(f"no account for channel {channel_id}", channel_id=channel_id)
        return account

    def scan_ascending(self, start_after: str | None = None) -> Iterator[tuple[str, Account]]:
        """Yield ``(channel_id, account)`` pairs ordered by channel id.

        Each call starts a fresh scan; *start_after* resumes after a given id.
        """
        prefix_len = len(self._prefix)
        for key, raw in self._storage.scan(self._prefix):
            channel_id = key[prefix_len:].decode()
            if start_after is not None and channel_id <= start_after:
                continue
            yield channel_id, self._decode(channel_id, raw)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, channel_id: str, account: Account) -> None:
        self._write(self._key(channel_id), account.to_bytes())

    def update(self, channel_id: str, transform: Callable[[Account | None], Account]) -> Account:
        """Load, transform and persist in one step.

        *transform* receives ``None`` when no account exists and may raise to
        abort; nothing is written in that case.
        """
        updated = transform(self.may_load(channel_id))
        self.save(channel_id, updated)
        return updated

    def delete(self, channel_id: str) -> None:
        key = self._key(channel_id)
        if self._storage.get(key) is not None:
            self._write(key, None)

    @contextlib.contextmanager
    def transaction(self) -> Iterator[AccountStore]:
        """Roll back every write made in the block if it raises.

        A nested transaction joins the outermost one.
        """
        if self._journal is not None:
            yield self
            return

        self._journal = {}
        try:
            yield self
        except BaseException:
            for key, previous in self._journal.items():
                if previous is None:
                    self._storage.remove(key)
                else:
                    self._storage.set(key, previous)
            raise
        finally:
            self._journal = None
