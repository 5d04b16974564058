from __future__ import annotations

from collections.abc import Iterator

from slotwire.exceptions import SlotWireInvalidKeyError

DEFAULT_KEY_ID = 0
"""Key id of the default slot, used when no disambiguator is given."""


class KeyRegistry:
    """Intern disambiguator strings into stable positive integers.

    Each string gets its number on first create-allowed use and keeps it for
    the lifetime of this object. Numbers start at 1 and are never reused;
    ``DEFAULT_KEY_ID`` (0) stands for "no key".

    The class holds no lock of its own. ``Registry`` calls it while holding
    the registry lock.
    """

    def __init__(self) -> None:
        self._ids_by_key: dict[str, int] = {}
        self._counter = 0

    def intern(self, key: str | None, *, allow_create: bool = True) -> int:
        """Return the integer id for ``key``.

        Args:
            key: Disambiguator string, or ``None`` for the default slot.
            allow_create: Assign the next id to an unknown key. When false an
                unknown key maps to ``DEFAULT_KEY_ID`` and nothing is stored.

        Returns:
            The interned id, or ``DEFAULT_KEY_ID``.

        Raises:
            SlotWireInvalidKeyError: If ``key`` is neither ``str`` nor ``None``.

        """
        if key is None:
            return DEFAULT_KEY_ID
        if not isinstance(key, str):
            msg = f"Registration key must be a string or None, got {key!r}."
            raise SlotWireInvalidKeyError(msg)

        key_id = self._ids_by_key.get(key)
        if key_id is not None:
            return key_id
        if not allow_create:
            return DEFAULT_KEY_ID

        self._counter += 1
        self._ids_by_key[key] = self._counter
        return self._counter

    @property
    def counter(self) -> int:
        """Last id handed out, ``0`` when nothing was interned yet."""
        return self._counter

    def pairs(self) -> tuple[tuple[str, int], ...]:
        """Return interned ``(key, id)`` pairs in first-interning order."""
        return tuple(self._ids_by_key.items())

    def __contains__(self, key: object) -> bool:
        return key in self._ids_by_key

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._ids_by_key))

    def __len__(self) -> int:
        return len(self._ids_by_key)

    def __repr__(self) -> str:
        return f"KeyRegistry(counter={self._counter}, keys={list(self._ids_by_key)!r})"
