"""TraceReplayer feeds parsed trace records into the cache.

Each record is expanded into the distinct cache lines it touches and the
cache is accessed once per line. The access counter in the shared
SimulationState is advanced after every access; it is the recency clock
the cache stamps lines with.

Line boundaries are found by watching the bits above the offset change
from one byte to the next. The read sweep masks them to the offset width;
the write sweep of a Modify record masks them to the set-index width.
"""
from typing import Callable, Iterable, List, Optional

from csim.core.cache import AccessResult, Cache
from csim.core.state import SimulationState
from csim.core.trace import Operation, TraceRecord
from csim.data.stats_export import Statistics


class TraceReplayer:
    def __init__(self, cache: Cache, state: Optional[SimulationState] = None):
        self.cache = cache
        self.state = state or SimulationState()

    @property
    def stats(self) -> Statistics:
        return self.state.stats

    def _line_key(self, address: int, mask_bits: int) -> int:
        return (address >> self.cache.offset_bits) & ((1 << mask_bits) - 1)

    def _pass(self, address: int, length: int, mask_bits: int) -> List[AccessResult]:
        """One sweep over [address, address + length), one access per line."""
        results = []
        prev_key = None
        for i in range(length):
            key = self._line_key(address + i, mask_bits)
            if key != prev_key:
                results.append(self.cache.access(address + i, self.state))
                self.state.tick()
                prev_key = key
        return results

    def replay_record(self, record: TraceRecord) -> List[AccessResult]:
        if record.operation is Operation.INSTRUCTION:
            return []
        results = self._pass(record.address, record.length, self.cache.offset_bits)
        if record.operation is Operation.MODIFY:
            # write pass over the same span
            results.extend(self._pass(record.address, record.length, self.cache.index_bits))
        return results

    def replay(self, records: Iterable[TraceRecord], callback: Optional[Callable[[dict], None]] = None) -> Statistics:
        for record in records:
            results = self.replay_record(record)
            if callback:
                callback({
                    'record': record,
                    'results': results,
                    'stats': self.stats,
                })
        return self.stats
