"""Statistics and exporter.
"""
import csv
import json
from typing import Dict, List, Optional


class Statistics:
    def __init__(self):
        self.reset()

    def reset(self):
        # counters start from zero
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def record_access(self, hit: bool, evicted: bool = False):
        # call this once per distinct cache-line access
        if hit:
            self.hits += 1
        else:
            self.misses += 1
            if evicted:
                self.evictions += 1

    @property
    def accesses(self):
        return self.hits + self.misses

    @property
    def hit_rate(self):
        return (self.hits / self.accesses) if self.accesses else 0.0

    @property
    def miss_rate(self):
        return (self.misses / self.accesses) if self.accesses else 0.0

    def summary(self) -> str:
        return f"hits:{self.hits} misses:{self.misses} evictions:{self.evictions}"

    def as_dict(self) -> Dict[str, float]:
        return {
            'accesses': self.accesses,
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
            'hit_rate': self.hit_rate,
            'miss_rate': self.miss_rate,
        }

    def __repr__(self):
        return f"Statistics({self.summary()})"


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics) -> str:
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['accesses', 'hits', 'misses', 'evictions', 'hit_rate', 'miss_rate'])
            writer.writerow([
                stats.accesses, stats.hits, stats.misses, stats.evictions,
                stats.hit_rate, stats.miss_rate,
            ])
        return path

    @staticmethod
    def export_stats_json(path: str, stats: Statistics, hit_rate_history: Optional[List[float]] = None) -> str:
        """Write the final counters and the per-record hit-rate history as JSON."""
        data = {
            'stats': stats.as_dict(),
            'hit_rate_history': list(hit_rate_history or []),
        }
        with open(path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh, indent=2)
        return path

    @staticmethod
    def export_chart_pdf(path: str, hit_rate_history: List[float]) -> str:
        """Render the hit-rate history to a PDF using matplotlib and save it.
        """
        import matplotlib
        matplotlib.use('Agg')
        import matplotlib.pyplot as plt

        data = list(hit_rate_history) or [0]
        fig, ax = plt.subplots(figsize=(6, 2))
        ax.plot(range(len(data)), data, color='#FFA500', linewidth=2)
        ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
        ax.set_ylim(0, 1)
        ax.set_xlabel('Trace record')
        ax.set_ylabel('Hit rate')
        ax.grid(False)
        fig.tight_layout()
        fig.savefig(path, format='pdf', dpi=150)
        plt.close(fig)
        return path
