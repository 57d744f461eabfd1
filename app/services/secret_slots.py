from __future__ import annotations

from typing import MutableMapping, Optional

SLOT_KEY_PREFIX = 'api-token-secret:'


class SecretSlotStore:
    """One-shot storage for freshly issued token secrets.

    Wraps any mutable mapping; in a request that is the Flask session, so a
    secret survives exactly one redirect and is gone after it is read.
    """

    def __init__(self, storage: MutableMapping):
        self._storage = storage

    @staticmethod
    def _key(token_id: int) -> str:
        return f'{SLOT_KEY_PREFIX}{token_id}'

    def put(self, token_id: int, secret: str) -> None:
        self._storage[self._key(token_id)] = secret

    def consume(self, token_id: int) -> Optional[str]:
        return self._storage.pop(self._key(token_id), None)

    def __contains__(self, token_id: int) -> bool:
        return self._key(token_id) in self._storage
