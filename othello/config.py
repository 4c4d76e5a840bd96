"""Engine configuration loaded from YAML.

Example::

    search:
      depth: 6
      win_score: 10000
    weights:
      corner: 100
      mobility: 2
    ordering:
      edge: 500

Missing keys keep their defaults; unknown keys are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from othello.core.errors import ConfigurationError
from othello.search import EvaluatorWeights, MinimaxConfig, OrderingPriorities


@dataclass
class EngineConfig:
    search: MinimaxConfig

    @classmethod
    def default(cls) -> "EngineConfig":
        return cls(search=MinimaxConfig())

    def validate(self) -> "EngineConfig":
        if self.search.depth < 1:
            raise ConfigurationError(f"search.depth must be >= 1, got {self.search.depth}.")
        if self.search.win_score <= 0:
            raise ConfigurationError("search.win_score must be positive.")
        self.search.weights.validate()
        self.search.priorities.validate()
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search": {"depth": self.search.depth, "win_score": self.search.win_score},
            "weights": self.search.weights.to_dict(),
            "ordering": self.search.priorities.to_dict(),
        }


def _section(raw: Mapping[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Config section '{name}' must be a mapping.")
    return dict(value)


def _build(cls, values: Dict[str, Any], section: str):
    allowed = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise ConfigurationError(f"Unknown keys in '{section}': {', '.join(unknown)}.")
    try:
        return cls(**{key: float(value) for key, value in values.items()})
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid value in '{section}': {exc}") from exc


def config_from_dict(raw: Optional[Mapping[str, Any]]) -> EngineConfig:
    raw = raw or {}
    unknown = sorted(set(raw) - {"search", "weights", "ordering"})
    if unknown:
        raise ConfigurationError(f"Unknown config sections: {', '.join(unknown)}.")

    search_cfg = _section(raw, "search")
    extra = sorted(set(search_cfg) - {"depth", "win_score"})
    if extra:
        raise ConfigurationError(f"Unknown keys in 'search': {', '.join(extra)}.")

    search = MinimaxConfig(
        weights=_build(EvaluatorWeights, _section(raw, "weights"), "weights"),
        priorities=_build(OrderingPriorities, _section(raw, "ordering"), "ordering"),
    )
    try:
        if "depth" in search_cfg:
            search = replace(search, depth=int(search_cfg["depth"]))
        if "win_score" in search_cfg:
            search = replace(search, win_score=float(search_cfg["win_score"]))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid value in 'search': {exc}") from exc
    return EngineConfig(search=search).validate()


def load_config(path: Union[str, Path]) -> EngineConfig:
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigurationError(f"Config file {cfg_path} does not exist.")
    try:
        raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse {cfg_path}: {exc}") from exc
    if raw is not None and not isinstance(raw, Mapping):
        raise ConfigurationError(f"{cfg_path} must contain a mapping at the top level.")
    return config_from_dict(raw)
