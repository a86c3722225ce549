"""Simulation wrapper used by the command line

Builds the cache from a validated configuration, reads the trace and
forwards its records to the replayer.
"""
from typing import Callable, Iterable, List, Optional
import logging

from csim.core.cache import Cache
from csim.core.simulator import TraceReplayer
from csim.core.state import SimulationState
from csim.core.trace import read_trace
from csim.data.stats_export import Statistics
from csim.simulation.config import SimulationConfig

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(self, config: SimulationConfig):
        self.config = config.validate()
        self.cache = Cache(
            set_count=config.set_count,
            lines_per_set=config.lines_per_set,
            line_bytes=config.line_bytes,
            policy=config.policy,
        )
        self.state = SimulationState()
        self.replayer = TraceReplayer(self.cache, self.state)
        # hit rate after each record, used by the JSON/PDF exporters
        self.hit_rate_history: List[float] = []

    @property
    def stats(self) -> Statistics:
        return self.state.stats

    def reset(self):
        self.cache.reset()
        self.state.reset()
        self.hit_rate_history = []

    def _on_record(self, callback):
        def handle(info):
            self.hit_rate_history.append(info['stats'].hit_rate)
            if callback:
                callback(info)
        return handle

    def run(self, lines: Optional[Iterable[str]] = None, callback: Optional[Callable[[dict], None]] = None) -> Statistics:
        """Replay the trace and return the statistics.

        `lines` replaces the configured trace file when given. OSError from
        opening the file and TraceFormatError from parsing propagate.
        """
        handler = self._on_record(callback)
        if lines is not None:
            self.replayer.replay(read_trace(lines), handler)
        else:
            logger.debug("replaying %s", self.config.trace_path)
            with open(self.config.trace_path, "r") as fh:
                self.replayer.replay(read_trace(fh), handler)
        logger.debug("replay finished: %d accesses, %s", self.stats.accesses, self.stats.summary())
        return self.stats
