"""Mutable per-run simulation state.

Holds the global access counter (the recency clock) and the statistics
counters. One instance is created per run and handed to both the replayer
and Cache.access, so nothing lives at module level.
"""
from dataclasses import dataclass, field

from csim.data.stats_export import Statistics


@dataclass
class SimulationState:
    # logical clock: one tick per distinct cache-line access
    count: int = 0
    stats: Statistics = field(default_factory=Statistics)

    def tick(self) -> None:
        self.count += 1

    def reset(self) -> None:
        self.count = 0
        self.stats.reset()
