from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from typing_extensions import Self

from slotwire.keys import DEFAULT_KEY_ID, KeyRegistry


@dataclass(frozen=True, slots=True)
class DependencyIdentity:
    """Address one registration slot: a contract plus an interned key id.

    Two identities are equal when both the contract and the key id are equal.
    The dataclass is frozen, so hashing always agrees with equality and the
    identity can back dictionary lookups.
    """

    contract: Any
    """The contract (usually a class or protocol) callers ask for."""

    key_id: int = DEFAULT_KEY_ID
    """Interned disambiguator id; ``0`` is the default slot."""

    @classmethod
    def build(
        cls,
        contract: Any,
        key: str | None,
        *,
        keys: KeyRegistry,
        allow_create: bool,
    ) -> Self:
        """Intern ``key`` through ``keys`` and pair it with ``contract``."""
        return cls(contract=contract, key_id=keys.intern(key, allow_create=allow_create))

    @property
    def is_default(self) -> bool:
        return self.key_id == DEFAULT_KEY_ID

    def __repr__(self) -> str:
        contract_name = getattr(self.contract, "__qualname__", repr(self.contract))
        return f"DependencyIdentity({contract_name}, key_id={self.key_id})"
