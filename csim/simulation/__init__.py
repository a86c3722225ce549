"""Simulation package shim.

This module exposes the Simulation class at `csim.simulation` so callers
can write `from csim.simulation import Simulation`.
"""
from .config import ConfigError, MissingArgumentsError, SimulationConfig, load_config
from .simulation import Simulation

__all__ = ["ConfigError", "MissingArgumentsError", "Simulation", "SimulationConfig", "load_config"]
