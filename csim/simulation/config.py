"""Simulation configuration and validation.

Geometry is checked here, before any cache is built; the core assumes it
holds. Values can come from command-line flags, a JSON file, or both
(flags win).
"""
import json
from dataclasses import dataclass, fields
from typing import Optional

from csim.core.replacement_policies import Policy


class ConfigError(ValueError):
    """Invalid or missing simulation parameters."""


class MissingArgumentsError(ConfigError):
    """A required parameter was not given at all."""

    def __init__(self, message="Negative or missing command line arguments"):
        super().__init__(message)


def is_power_of_two(value) -> bool:
    return isinstance(value, int) and value > 0 and value & (value - 1) == 0


@dataclass
class SimulationConfig:
    set_count: Optional[int] = None
    lines_per_set: Optional[int] = None
    line_bytes: Optional[int] = None
    policy: Optional[Policy] = None
    trace_path: Optional[str] = None
    verbose: bool = False

    def validate(self) -> "SimulationConfig":
        """Check every parameter; returns self so calls can be chained."""
        required = (self.set_count, self.lines_per_set, self.line_bytes, self.policy, self.trace_path)
        if any(value is None for value in required):
            raise MissingArgumentsError()
        if not is_power_of_two(self.set_count):
            raise ConfigError("S must be a power of 2")
        if not isinstance(self.lines_per_set, int) or self.lines_per_set <= 0:
            raise ConfigError("K must be a number larger than 0")
        if not is_power_of_two(self.line_bytes):
            raise ConfigError("B must be a power of 2")
        try:
            self.policy = Policy.parse(self.policy)
        except ValueError:
            raise ConfigError("Policy must be FIFO or LRU") from None
        if not self.trace_path:
            raise MissingArgumentsError()
        return self

    def merged(self, **overrides) -> "SimulationConfig":
        """Copy with every non-None override applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SimulationConfig(**values)


# JSON keys follow the command-line flag letters
_JSON_KEYS = {
    'S': 'set_count',
    'K': 'lines_per_set',
    'B': 'line_bytes',
    'policy': 'policy',
    'trace': 'trace_path',
    'verbose': 'verbose',
}


def load_config(path: str) -> SimulationConfig:
    """Read a SimulationConfig from a JSON object such as
    {"S": 16, "K": 1, "B": 16, "policy": "LRU", "trace": "traces/yi.trace"}.

    The result is not validated yet.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON ({exc.msg})") from None
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object")

    unknown = sorted(set(data) - set(_JSON_KEYS))
    if unknown:
        raise ConfigError(f"{path}: unknown keys {', '.join(unknown)}")
    return SimulationConfig(**{_JSON_KEYS[k]: v for k, v in data.items()})
