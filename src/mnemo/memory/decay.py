"""
Decay strategies.

Each strategy owns its own notion of decay: strength reduction, eviction,
or nothing at all. The orchestrator only calls `apply` once per pass.
"""

from collections.abc import Callable
from datetime import datetime, timedelta

from mnemo.core.logging import get_logger
from mnemo.memory.base import DecayReport, DecayStrategy, MemoryStore

logger = get_logger("memory.decay")


class NoDecay(DecayStrategy):
    """Leaves the store untouched."""

    def apply(self, store: MemoryStore) -> DecayReport:
        return DecayReport()


class ExponentialDecay(DecayStrategy):
    """Halve strength every `half_life` since the last access.

    Each pass only charges the time since the later of the last access and
    the previous pass, so periodic passes add up to one halving per
    `half_life`. Strength never falls below `floor`.
    """

    def __init__(
        self,
        half_life: timedelta,
        floor: float = 0.0,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if half_life <= timedelta(0):
            raise ValueError(f"half_life must be positive, got {half_life}")
        if not 0.0 <= floor <= 1.0:
            raise ValueError(f"floor must be within [0, 1], got {floor}")
        self.half_life = half_life
        self.floor = floor
        self._clock = clock
        self._last_applied: datetime | None = None

    def apply(self, store: MemoryStore) -> DecayReport:
        now = self._clock()
        report = DecayReport()

        for memory in store.iter():
            elapsed = now - memory.last_accessed_at
            if self._last_applied is not None:
                elapsed = min(elapsed, now - self._last_applied)
            if elapsed <= timedelta(0):
                continue

            factor = 0.5 ** (elapsed / self.half_life)
            new_strength = max(self.floor, memory.strength * factor)
            if new_strength < memory.strength:
                target = store.get_mut(memory.id)
                if target is None:
                    continue
                target.strength = new_strength
                report.decayed += 1

        self._last_applied = now
        logger.debug(f"Exponential decay weakened {report.decayed} memories")
        return report


class ThresholdEviction(DecayStrategy):
    """Remove memories whose strength dropped below `min_strength`."""

    def __init__(self, min_strength: float):
        self.min_strength = min_strength

    def apply(self, store: MemoryStore) -> DecayReport:
        report = DecayReport()
        weak = [m.id for m in store.iter() if m.strength < self.min_strength]
        for memory_id in weak:
            if store.remove(memory_id):
                report.evicted += 1

        if report.evicted:
            logger.info(f"Evicted {report.evicted} memories below strength {self.min_strength}")
        return report


class CompositeDecay(DecayStrategy):
    """Apply several strategies in order."""

    def __init__(self, *strategies: DecayStrategy):
        self.strategies = strategies

    def apply(self, store: MemoryStore) -> DecayReport:
        report = DecayReport()
        for strategy in self.strategies:
            report = report.merge(strategy.apply(store))
        return report
