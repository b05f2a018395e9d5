from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from subtitle_processor.constants import CREDIT_PATTERNS, LINE_SENTINEL

FORMATS = ("subtitles", "captions")


def read_config_file(path: Path) -> Dict[str, Any]:
    """Parse one YAML config file; an empty file counts as an empty mapping."""
    loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
    if loaded is None:
        return {}
    if isinstance(loaded, dict):
        return loaded
    raise ValueError(f"{path.name}: expected a mapping at the top level, got {type(loaded).__name__}")


def deep_merge(base: Any, override: Any) -> Any:
    """Layer override on top of base. Nested sections merge key by key;
    any other value (lists included) in override wins outright."""
    if not (isinstance(base, dict) and isinstance(override, dict)):
        return override
    return {
        key: deep_merge(base[key], override[key]) if key in base and key in override
        else override.get(key, base.get(key))
        for key in {**base, **override}
    }


def load_effective_config(
    base_dir: Path,
    default_name: str = "config.default.yaml",
    local_name: str = "config.yaml",
) -> Tuple[Dict[str, Any], bool]:
    """Return (default config merged with the optional local one, has_local)."""
    default_path = base_dir / default_name
    if not default_path.exists():
        raise FileNotFoundError(f"Missing required config: {default_path}")
    default_cfg = read_config_file(default_path)

    local_path = base_dir / local_name
    if not local_path.exists():
        return default_cfg, False
    return deep_merge(default_cfg, read_config_file(local_path)), True


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = cfg.get(name)
    return value if isinstance(value, dict) else {}


@dataclass
class PipelineSettings:
    format: str = "subtitles"
    log_level: str = "info"
    credit_patterns: Tuple[str, ...] = CREDIT_PATTERNS
    reformat: bool = True
    names_path: Optional[str] = None
    sentinel: str = LINE_SENTINEL
    outdir: str = "output"
    suffix: str = ".processed.srt"


def resolve_settings(cfg: Dict[str, Any]) -> PipelineSettings:
    """Pick the pipeline settings out of a merged config dict."""
    fmt = str(cfg.get("format") or "subtitles").strip().lower()
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format '{fmt}'; expected one of: {', '.join(FORMATS)}")

    patterns = _section(cfg, "captions").get("credit_patterns")
    if patterns is None:
        patterns = CREDIT_PATTERNS
    elif not isinstance(patterns, list):
        raise ValueError("captions.credit_patterns must be a list of strings")

    sentinel = _section(cfg, "translation").get("sentinel") or LINE_SENTINEL
    output = _section(cfg, "output")
    return PipelineSettings(
        format=fmt,
        log_level=str(_section(cfg, "logging").get("level") or "info").strip().lower(),
        credit_patterns=tuple(str(p) for p in patterns if p),
        reformat=bool(cfg.get("reformat", True)),
        names_path=_section(cfg, "names").get("dictionary") or None,
        sentinel=str(sentinel),
        outdir=str(output.get("dir") or "output"),
        suffix=str(output.get("suffix") or ".processed.srt"),
    )
