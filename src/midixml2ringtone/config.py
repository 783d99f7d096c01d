# src/midixml2ringtone/config.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import logging
import yaml

log = logging.getLogger(__name__)

# Paket-Root: .../src/midixml2ringtone
PKG_ROOT = Path(__file__).resolve().parent
DEFAULT_CFG_PATH = PKG_ROOT / "config.default.yaml"
USER_CFG_PATH = Path.home() / ".config" / "midixml2ringtone" / "config.yaml"

def _safe_load(path: Path) -> Dict[str, Any]:
    try:
        if path.exists():
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if isinstance(data, dict):
                return data
            log.warning("ignoring config %s: top level is %s, not a mapping", path, type(data).__name__)
    except (OSError, yaml.YAMLError) as e:
        log.warning("ignoring unreadable config %s: %s", path, e)
    return {}

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out

def load_config(
    user_path: Optional[Path] = None,
    default_path: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Loads the packaged defaults and deep-merges the user overrides on top.
    An explicit user_path replaces the per-user file in ~/.config.
    """
    dpath = Path(default_path) if default_path else DEFAULT_CFG_PATH
    upath = Path(user_path) if user_path else USER_CFG_PATH

    defaults = _safe_load(dpath)
    user = _safe_load(upath)
    cfg = _deep_merge(defaults, user)

    cfg.setdefault("lane_count", 8)
    cfg.setdefault("strict_unclosed_notes", False)
    cfg.setdefault("tokens", {})
    cfg.setdefault("quantize", {})
    return cfg

@dataclass(frozen=True)
class ConverterConfig:
    lane_count: int = 8
    delimiter: str = ","
    rest_marker: str = "p"
    dotted_suffix: str = "."
    max_pieces: int = 64
    strict_unclosed_notes: bool = False

def converter_config(cfg: Optional[Dict[str, Any]] = None) -> ConverterConfig:
    """Freezes the relevant part of a merged config dict."""
    cfg = cfg or {}
    tokens = cfg.get("tokens") or {}
    quant = cfg.get("quantize") or {}
    base = ConverterConfig()
    lane_count = int(cfg.get("lane_count", base.lane_count))
    if lane_count <= 0:
        raise ValueError(f"lane_count must be > 0, got {lane_count}")
    return ConverterConfig(
        lane_count=lane_count,
        delimiter=str(tokens.get("delimiter", base.delimiter)),
        rest_marker=str(tokens.get("rest_marker", base.rest_marker)),
        dotted_suffix=str(tokens.get("dotted_suffix", base.dotted_suffix)),
        max_pieces=int(quant.get("max_pieces", base.max_pieces)),
        strict_unclosed_notes=bool(cfg.get("strict_unclosed_notes", base.strict_unclosed_notes)),
    )
