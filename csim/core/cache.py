"""Core cache implementation

This file provides the set-associative cache model driven by the trace replayer.
Behavior:
- Cache is composed of `set_count` sets; each set has `lines_per_set` lines.
  offset_bits = log2(line_bytes), index_bits = log2(set_count)
  set_index = (address >> offset_bits) & ((1 << index_bits) - 1)
  tag = address >> (offset_bits + index_bits)
- Access returns AccessResult(hit, set_index, way_index, evicted)

set_count and line_bytes must be powers of two. The configuration layer
checks that before a Cache is built, so nothing here validates it again.
"""

import logging
from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional

from csim.core.replacement_policies import Policy, select_victim
from csim.core.state import SimulationState

logger = logging.getLogger(__name__)


@dataclass
class CacheLine:
    """container for a cache line (way).

    Fields:
    - valid: whether the line currently holds a block
    - tag: the tag of the address that filled this line
    - recency: access-counter value at fill time (FIFO) or at fill/hit (LRU)
    """

    valid: bool = False
    tag: Optional[int] = None
    recency: int = 0


class AccessResult(NamedTuple):
    hit: bool
    set_index: int
    way_index: int
    # copy of the line that was replaced, None unless an eviction happened
    evicted: Optional[CacheLine]


def log2(value: int) -> int:
    # exact for powers of two
    return value.bit_length() - 1


class Cache:
    """Set-associative cache model with FIFO or LRU eviction.
    """

    def __init__(
        self,
        set_count: int = 1,
        lines_per_set: int = 1,
        line_bytes: int = 1,
        policy: Policy = Policy.LRU,
    ):
        self.set_count = set_count
        self.lines_per_set = lines_per_set
        self.line_bytes = line_bytes
        self.policy = Policy.parse(policy)
        self.offset_bits = log2(line_bytes)
        self.index_bits = log2(set_count)
        self._index_mask = (1 << self.index_bits) - 1

        # allocate the sets matrix: set_count x lines_per_set
        self.sets: List[List[CacheLine]] = [
            [CacheLine() for _ in range(lines_per_set)] for _ in range(set_count)
        ]
        logger.debug(
            "allocated cache S=%d K=%d B=%d policy=%s (index_bits=%d offset_bits=%d)",
            set_count, lines_per_set, line_bytes, self.policy.value,
            self.index_bits, self.offset_bits,
        )

    def decode(self, address: int):
        """Decode address into (set_index, tag)."""
        set_index = (address >> self.offset_bits) & self._index_mask
        tag = address >> (self.offset_bits + self.index_bits)
        return set_index, tag

    def access(self, address: int, state: SimulationState) -> AccessResult:
        """Perform one cache-line access.

        Updates exactly one line and the hit/miss/eviction counters in
        `state.stats`. The current value of `state.count` is the recency
        stamp; the caller advances the counter after this returns.
        """
        set_index, tag = self.decode(address)
        cache_set = self.sets[set_index]
        stamp = state.count

        # scan every way; remember the first free slot while looking for a hit
        full = True
        free_index = None
        for wi, line in enumerate(cache_set):
            if full and not line.valid:
                full = False
                free_index = wi
            if line.valid and line.tag == tag:
                if self.policy.refreshes_on_hit:
                    line.recency = stamp
                state.stats.record_access(True)
                logger.debug("addr=%#x set=%d tag=%#x hit way=%d", address, set_index, tag, wi)
                return AccessResult(True, set_index, wi, None)

        if not full:
            line = cache_set[free_index]
            line.valid = True
            line.tag = tag
            line.recency = stamp
            state.stats.record_access(False)
            logger.debug("addr=%#x set=%d tag=%#x miss fill way=%d", address, set_index, tag, free_index)
            return AccessResult(False, set_index, free_index, None)

        victim_index = select_victim(cache_set)
        victim = cache_set[victim_index]
        evicted = replace(victim)
        victim.tag = tag
        victim.recency = stamp
        state.stats.record_access(False, evicted=True)
        logger.debug(
            "addr=%#x set=%d tag=%#x miss evict way=%d (old tag=%#x)",
            address, set_index, tag, victim_index, evicted.tag,
        )
        return AccessResult(False, set_index, victim_index, evicted)

    def valid_lines(self, set_index: int) -> int:
        return sum(1 for line in self.sets[set_index] if line.valid)

    def reset(self):
        """Invalidate every line.
        """
        for s in self.sets:
            for line in s:
                line.valid = False
                line.tag = None
                line.recency = 0
