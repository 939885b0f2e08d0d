from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Protocol, Sequence, TypeVar

from .errors import ConfigurationError, PairSumMismatchError


class SupportsOrderedAdd(Protocol):
    """Totally ordered values whose sum is again the same kind of value."""

    def __lt__(self, other: Any) -> bool: ...

    def __add__(self, other: Any) -> Any: ...


T = TypeVar("T", bound=SupportsOrderedAdd)

# (ascending window values, target) -> does a pair of distinct positions sum to target
PairSumStrategy = Callable[[Sequence[Any], Any], bool]


def two_pointer_has_pair_sum(sorted_values: Sequence[T], target: T) -> bool:
    """Scan an ascending sequence from both ends looking for a pair summing to target.

    Each step narrows [low, high] by one, so the query is O(n). ``low`` and
    ``high`` are always distinct positions, so two equal values at different
    positions count as a pair.
    """
    if len(sorted_values) < 2:
        return False
    low = 0
    high = len(sorted_values) - 1
    while low < high:
        total = sorted_values[low] + sorted_values[high]
        if total < target:
            low += 1
        elif target < total:
            high -= 1
        else:
            return True
    return False


def naive_has_pair_sum(values: Sequence[T], target: T) -> bool:
    """O(n^2) reference: try every pair of distinct positions."""
    n = len(values)
    for i in range(n):
        for j in range(i + 1, n):
            if values[i] + values[j] == target:
                return True
    return False


class CrossCheckedPairSum:
    """Run a primary strategy and verify it against a reference on every query.

    Intended for tests and debugging runs; raises PairSumMismatchError on the
    first disagreement.
    """

    def __init__(
        self,
        primary: PairSumStrategy = two_pointer_has_pair_sum,
        reference: PairSumStrategy = naive_has_pair_sum,
    ) -> None:
        self.primary = primary
        self.reference = reference
        self.checks = 0

    def __call__(self, sorted_values: Sequence[Any], target: Any) -> bool:
        found = self.primary(sorted_values, target)
        expected = self.reference(sorted_values, target)
        self.checks += 1
        if found != expected:
            raise PairSumMismatchError(target, found, expected, sorted_values)
        return found


@dataclass
class StrategySpec:
    key: str
    check: PairSumStrategy
    label: str


def build_registry() -> Dict[str, StrategySpec]:
    return {
        "two_pointer": StrategySpec(
            key="two_pointer", check=two_pointer_has_pair_sum, label="Two-pointer O(n)"
        ),
        "naive": StrategySpec(
            key="naive", check=naive_has_pair_sum, label="Pairwise O(n^2)"
        ),
        "cross_check": StrategySpec(
            key="cross_check",
            check=CrossCheckedPairSum(),
            label="Two-pointer verified against pairwise",
        ),
    }


def resolve_strategy(key: str) -> PairSumStrategy:
    registry = build_registry()
    try:
        return registry[key].check
    except KeyError:
        known = ", ".join(sorted(registry))
        raise ConfigurationError(f"unknown pair-sum strategy {key!r} (known: {known})") from None
