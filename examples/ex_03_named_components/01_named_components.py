"""Named components with ``Component("name")`` and ``Annotated`` contracts.

``Annotated[Contract, Component("name")]`` is another spelling of
``(Contract, key="name")``, handy for type aliases and decorator registration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from slotwire import Component, Registry


@dataclass(slots=True)
class UserStore:
    backend: str

    def get_user(self, user_id: int) -> str:
        return f"{self.backend}:user:{user_id}"


PrimaryStore = Annotated[UserStore, Component("primary")]
FallbackStore = Annotated[UserStore, Component("fallback")]


def main() -> None:
    registry = Registry()

    registry.register_singleton(PrimaryStore, lambda: UserStore(backend="redis"))

    @registry.register_prototype(FallbackStore)
    def build_fallback() -> UserStore:
        return UserStore(backend="memory")

    primary = registry.resolve(UserStore, key="primary")
    fallback = registry.resolve(FallbackStore)
    assert primary is not None
    assert fallback is not None

    print(f"primary={primary.get_user(1)}")  # => primary=redis:user:1
    print(f"fallback={fallback.get_user(1)}")  # => fallback=memory:user:1
    print(f"decorated_kept={build_fallback().backend}")  # => decorated_kept=memory


if __name__ == "__main__":
    main()
