"""Config loading helpers built around OmegaConf."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from omegaconf import OmegaConf


def load_config_any(path: str, overrides: Optional[Sequence[str]] = None) -> Any:
    """Load a YAML file, merge dotlist ``overrides`` (``cube.size=2.0``) and resolve it."""
    base = OmegaConf.load(path)
    if overrides:
        base = OmegaConf.merge(base, OmegaConf.from_dotlist(list(overrides)))
    return OmegaConf.to_container(base, resolve=True)


def load_config_dict(path: str, overrides: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """Load a config file and guarantee a `dict` result."""
    cfg = load_config_any(path, overrides)
    if not isinstance(cfg, dict):
        raise TypeError(f"Expected mapping at {path}, got {type(cfg)}")
    return cfg


def section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a sub-mapping of ``cfg`` (empty if absent)."""
    data = cfg.get(name)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"Expected config section '{name}' to be a mapping, got {type(data)}")
    return dict(data)
