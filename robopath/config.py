# robopath/config.py
#!/usr/bin/env python3
"""
Runtime settings.

Resolution order (later wins):
- defaults below
- ENV: ROBOPATH_<KEY>, e.g. ROBOPATH_HEURISTIC=octile
- CLI: --key=value, e.g. --grid-size=24 --diagonal-moves
"""

import os
import sys
from dataclasses import dataclass, fields, replace
from typing import Dict, List, Mapping, Optional

from robopath.core.heuristics import HEURISTIC_KINDS

ENV_PREFIX = "ROBOPATH_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    grid_size: int = 18
    cell_size: int = 28
    heuristic: str = "euclidean"
    map_name: str = "01_default"
    map_path: Optional[str] = None
    step_ms: int = 150
    diagonal_moves: bool = False
    max_expansions: Optional[int] = None
    seed: Optional[int] = None
    log_level: str = "INFO"


_OPTIONAL_INTS = ("max_expansions", "seed")


def _coerce(key: str, raw: str):
    if key in ("grid_size", "cell_size", "step_ms") or key in _OPTIONAL_INTS:
        if key in _OPTIONAL_INTS and raw.lower() in ("", "none"):
            return None
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{key}: expected an integer, got {raw!r}") from None
        if key != "seed" and value <= 0:
            raise ValueError(f"{key}: must be positive, got {value}")
        return value
    if key == "diagonal_moves":
        low = raw.lower()
        if low in _TRUE:
            return True
        if low in _FALSE:
            return False
        raise ValueError(f"{key}: expected a boolean, got {raw!r}")
    if key == "heuristic":
        if raw not in HEURISTIC_KINDS:
            raise ValueError(f"{key}: expected one of {', '.join(HEURISTIC_KINDS)}, got {raw!r}")
        return raw
    if key == "log_level":
        level = raw.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"{key}: expected one of {', '.join(LOG_LEVELS)}, got {raw!r}")
        return level
    if key == "map_path":
        return raw or None
    return raw


def _from_env(environ: Mapping[str, str]) -> Dict[str, str]:
    out = {}
    for f in fields(Settings):
        name = ENV_PREFIX + f.name.upper()
        if name in environ:
            out[f.name] = environ[name]
    return out


def _from_argv(argv: List[str]) -> Dict[str, str]:
    known = {f.name for f in fields(Settings)}
    out = {}
    for arg in argv:
        if not arg.startswith("--"):
            continue
        key, sep, value = arg[2:].partition("=")
        key = key.replace("-", "_")
        if key not in known:
            raise ValueError(f"unknown option --{arg[2:].split('=', 1)[0]}")
        out[key] = value if sep else "true"
    return out


def resolve_settings(argv: Optional[List[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    raw = _from_env(environ)
    raw.update(_from_argv(argv))
    return replace(Settings(), **{k: _coerce(k, v) for k, v in raw.items()})
