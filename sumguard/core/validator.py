from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, Tuple

from .errors import WindowInvariantError
from .pairsum import T
from .window import PairSumWindow


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anomaly(Generic[T]):
    # 0-based stream position (line index of the input)
    position: int
    value: T


@dataclass
class ValidatorStats:
    processed: int = 0
    checked: int = 0
    anomalies: int = 0


class ValidatorState(str, enum.Enum):
    WARMUP = "warmup"
    STEADY = "steady"


class StreamValidator(Generic[T]):
    """Check each stream value against the pair sums of the recent window.

    The first ``validation_threshold`` values only fill the window. After
    that every value must equal the sum of two distinct window elements or it
    is reported through ``on_anomaly``. Anomalies never stop the stream.
    """

    def __init__(
        self,
        window: PairSumWindow[T],
        validation_threshold: Optional[int] = None,
        on_anomaly: Optional[Callable[[Anomaly[T]], None]] = None,
        check_invariants: bool = False,
    ) -> None:
        self.window = window
        self.validation_threshold = (
            window.capacity if validation_threshold is None else validation_threshold
        )
        if self.validation_threshold < 0:
            raise ValueError("validation_threshold must be >= 0")
        self.on_anomaly = on_anomaly
        self.check_invariants = check_invariants
        self._state = ValidatorState.WARMUP
        self._stats = ValidatorStats()
        self._update_state()

    @property
    def state(self) -> ValidatorState:
        return self._state

    def _update_state(self) -> None:
        if self._state is ValidatorState.WARMUP and len(self.window) >= self.validation_threshold:
            self._state = ValidatorState.STEADY
            logger.info(
                "warm-up complete",
                extra={"window_size": len(self.window), "position": self._stats.processed},
            )

    def process(self, position: int, value: T) -> Optional[Anomaly[T]]:
        anomaly: Optional[Anomaly[T]] = None
        if self._state is ValidatorState.STEADY:
            self._stats.checked += 1
            if not self.window.has_pair_sum(value):
                anomaly = Anomaly(position=position, value=value)
                self._stats.anomalies += 1
                if self.on_anomaly is not None:
                    self.on_anomaly(anomaly)

        if self.window.capacity > 0:
            if self.window.is_full():
                self.window.evict_oldest()
            self.window.insert(value)
        if self.check_invariants and not self.window.check_consistency():
            raise WindowInvariantError(f"window views diverged after position {position}")

        self._stats.processed += 1
        self._update_state()
        return anomaly

    def run(self, values: Iterable[T]) -> int:
        """Feed every value through ``process``; return the number of anomalies found."""
        return self.run_positioned(enumerate(values))

    def run_positioned(self, items: Iterable[Tuple[int, T]]) -> int:
        """Like ``run`` but with caller-supplied positions, e.g. source line numbers."""
        found = 0
        for position, value in items:
            if self.process(position, value) is not None:
                found += 1
        stats = self.stats()
        logger.info(
            "stream finished",
            extra={
                "processed": stats.processed,
                "checked": stats.checked,
                "anomalies": stats.anomalies,
            },
        )
        return found

    def stats(self) -> ValidatorStats:
        return ValidatorStats(**vars(self._stats))
