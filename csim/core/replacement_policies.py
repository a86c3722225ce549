"""Eviction policies for the cache model.

Both policies share one eviction rule: the victim is the line with the
smallest recency stamp. They differ only in when a line's stamp is
refreshed:

- FIFO: stamp at fill time only, so arrival order decides the victim
- LRU: stamp at fill time and on every hit

API:
- Policy.parse(name) -> Policy
- Policy.refreshes_on_hit -> bool
- select_victim(lines) -> index of the line to evict
"""

from enum import Enum
from typing import Sequence


class Policy(Enum):
    FIFO = "FIFO"
    LRU = "LRU"

    @property
    def refreshes_on_hit(self) -> bool:
        return self is Policy.LRU

    @classmethod
    def parse(cls, name) -> "Policy":
        """Map a user supplied name ('FIFO' / 'LRU') to a Policy.

        Raises ValueError for anything else, including None.
        """
        if isinstance(name, Policy):
            return name
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"unknown eviction policy: {name!r}") from None


def select_victim(lines: Sequence) -> int:
    """Index of the line with the minimum recency stamp.

    min() keeps the first minimum it sees, so ties go to the lowest index.
    """
    return min(range(len(lines)), key=lambda i: lines[i].recency)


__all__ = ["Policy", "select_victim"]
