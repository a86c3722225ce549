"""Entry point for the cache simulator.

Usage:
    python run.py -S 16 -K 1 -B 16 -p LRU -t traces/yi2.trace
    python run.py -h
"""
import sys

from csim.simulation.cli import main


if __name__ == '__main__':
    sys.exit(main())
