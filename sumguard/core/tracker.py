from __future__ import annotations

import logging
from typing import Any, List

from .validator import Anomaly


logger = logging.getLogger(__name__)


class AnomalyTracker:
    """Collect reported anomalies and log each one as it arrives."""

    def __init__(self, log_anomalies: bool = True) -> None:
        self.log_anomalies = log_anomalies
        self._anomalies: List[Anomaly[Any]] = []

    def record(self, anomaly: Anomaly[Any]) -> None:
        self._anomalies.append(anomaly)
        if self.log_anomalies:
            logger.warning(
                "anomaly detected",
                extra={"position": anomaly.position, "value": anomaly.value},
            )

    def count(self) -> int:
        return len(self._anomalies)

    def recent(self, limit: int = 100) -> List[Anomaly[Any]]:
        if limit <= 0:
            return []
        return list(self._anomalies[-limit:])

    def all(self) -> List[Anomaly[Any]]:
        return list(self._anomalies)
