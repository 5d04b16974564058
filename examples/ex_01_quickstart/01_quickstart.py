"""Quickstart: one contract, a shared default slot and a named prototype slot.

Register ``Sample`` twice for the same contract: once as a singleton under the
default slot and once as a prototype under the ``"Test"`` key. Handles from the
singleton slot see each other's changes, prototype handles do not.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from slotwire import Registry


class SampleContract(ABC):
    id: int
    name: str

    @abstractmethod
    def do_something(self) -> str: ...


class Sample(SampleContract):
    def __init__(self) -> None:
        self.id = 42
        self.name = ""

    def do_something(self) -> str:
        return "Doing something..."


def main() -> None:
    key = "Test"
    registry = Registry()
    registry.register_singleton(SampleContract, Sample)
    registry.register_prototype(SampleContract, Sample, key=key)

    sample1 = registry.resolve(SampleContract)
    sample2 = registry.resolve(SampleContract, key=key)
    sample3 = registry.resolve(SampleContract)
    sample4 = registry.resolve(SampleContract, key=key)
    assert sample1 is not None
    assert sample2 is not None
    assert sample3 is not None
    assert sample4 is not None

    sample1.name = "Alpha"
    sample2.name = "Beta"
    sample3.name = "Gamma"
    sample4.name = "Delta"

    print(f"sample1_id={sample1.id}")  # => sample1_id=42
    print(f"sample1_does={sample1.do_something()}")  # => sample1_does=Doing something...
    print(f"sample1_name={sample1.name}")  # => sample1_name=Gamma
    print(f"sample2_name={sample2.name}")  # => sample2_name=Beta
    print(f"sample3_name={sample3.name}")  # => sample3_name=Gamma
    print(f"sample4_name={sample4.name}")  # => sample4_name=Delta


if __name__ == "__main__":
    main()
