"""
Conversion configuration.

A single immutable record threaded explicitly through decomposition,
simplification, formatting and equality checks, so that concurrent
conversions with different settings never interfere.
"""

import math
from dataclasses import dataclass, fields, replace as dataclass_replace
from typing import Any, Dict, Mapping, Optional


# Option names accepted by from_options, including camelCase spellings
_OPTION_ALIASES: Dict[str, str] = {
    'spaceSeparation': 'space_separation',
    'space_separation': 'space_separation',
    'precision': 'precision',
    'epsilon': 'epsilon',
}


@dataclass(frozen=True)
class ConversionConfig:
    """Settings for one conversion.

    Attributes:
        space_separation: render operators with surrounding spaces ("2 · π")
        precision: decimal places for the fixed-point fallback rendering
        epsilon: tolerance for every numeric comparison
    """
    space_separation: bool = False
    precision: int = 8
    epsilon: float = 1e-10

    def __post_init__(self):
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ValueError(f"precision must be an integer, got {self.precision!r}")
        if self.precision < 0:
            raise ValueError("precision must be non-negative")
        if isinstance(self.epsilon, bool) or not isinstance(self.epsilon, (int, float)):
            raise ValueError(f"epsilon must be a number, got {self.epsilon!r}")
        if not math.isfinite(self.epsilon) or self.epsilon <= 0:
            raise ValueError("epsilon must be a finite positive number")
        # Normalise to builtin types
        object.__setattr__(self, 'space_separation', bool(self.space_separation))
        object.__setattr__(self, 'epsilon', float(self.epsilon))

    def replace(self, **changes) -> 'ConversionConfig':
        """Return a copy with the given fields changed"""
        return dataclass_replace(self, **changes)

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None,
                     **overrides) -> 'ConversionConfig':
        """
        Build a config from a partial mapping and/or keyword overrides.

        Missing fields keep their defaults. Both ``spaceSeparation`` and
        ``space_separation`` spellings are accepted.
        """
        merged: Dict[str, Any] = {}
        for source in (options or {}, overrides):
            for key, value in source.items():
                if key not in _OPTION_ALIASES:
                    valid = ', '.join(f.name for f in fields(cls))
                    raise ValueError(f"Unknown configuration option '{key}'. Valid options: {valid}")
                if value is not None:
                    merged[_OPTION_ALIASES[key]] = value
        return cls(**merged)


DEFAULT_CONFIG = ConversionConfig()


def resolve_config(config: Optional[ConversionConfig] = None, **overrides) -> ConversionConfig:
    """Combine an optional base config with keyword overrides"""
    if config is None:
        return ConversionConfig.from_options(**overrides) if overrides else DEFAULT_CONFIG
    if isinstance(config, Mapping):
        return ConversionConfig.from_options(config, **overrides)
    if not isinstance(config, ConversionConfig):
        raise TypeError(f"config must be a ConversionConfig or a mapping, got {type(config).__name__}")
    if overrides:
        return ConversionConfig.from_options(
            {f.name: getattr(config, f.name) for f in fields(config)}, **overrides)
    return config
