"""
Converter configuration loaded from ``as3ts.toml`` when a project provides one.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from .errors import ConfigError
from .typemap import build_type_map

CONFIG_FILENAME = "as3ts.toml"


@dataclass
class ConvertConfig:
    type_map: Dict[str, str] = field(default_factory=build_type_map)
    embed_tags: Tuple[str, ...] = ("Embed",)
    hint_tags: Tuple[str, ...] = ("Serialize",)
    config_namespaces: Tuple[str, ...] = ("CONFIG",)
    source_suffix: str = ".as"
    target_suffix: str = ".ts"

    @classmethod
    def from_dict(cls, data: dict) -> "ConvertConfig":
        section = data.get("convert", {}) if isinstance(data, dict) else {}
        if not isinstance(section, dict):
            raise ConfigError("[convert] must be a table")
        types = section.get("types", {})
        if not isinstance(types, dict) or not all(isinstance(v, str) for v in types.values()):
            raise ConfigError("[convert.types] must map type names to strings")
        config = cls(type_map=build_type_map(types))
        for key in ("embed_tags", "hint_tags", "config_namespaces"):
            if key in section:
                value = section[key]
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigError(f"'{key}' must be a list of strings")
                setattr(config, key, tuple(value))
        for key in ("source_suffix", "target_suffix"):
            if key in section:
                value = section[key]
                if not isinstance(value, str) or not value.startswith("."):
                    raise ConfigError(f"'{key}' must be a suffix such as '.as'")
                setattr(config, key, value)
        return config

    @classmethod
    def load(cls, project_root: Optional[Path]) -> "ConvertConfig":
        if project_root is None:
            return cls()
        cfg_path = project_root / CONFIG_FILENAME
        if not cfg_path.exists():
            return cls()
        try:
            data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigError(f"Cannot read {cfg_path}: {exc}") from exc
        return cls.from_dict(data)


def log_level_from_env(env: Optional[dict] = None, default: str = "WARNING") -> str:
    environ = os.environ if env is None else env
    level = str(environ.get("AS3TS_LOG_LEVEL", "")).strip().upper()
    if level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return level
    return default
