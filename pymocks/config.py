# pymocks/config.py
from pathlib import Path
from typing import Any, Dict
import importlib.resources as ir
import logging
import os
import tomllib

from .errors import ConfigError
from .typing_defs import BACKEND_NAMES

# Exposed for debugging: where the *project-local* config was loaded from (or None)
# This purposely *does not* point to the user-level config.
LAST_CONFIG_PATH: Path | None = None

_log = logging.getLogger("pymocks.config")

_NAMES = ("config.toml", "config.yaml", "config.yml")


# ---------- File discovery helpers ----------


def _first_existing(paths: list[Path]) -> Path | None:
    for p in paths:
        if p.is_file():
            return p
    return None


def _find_project_config(start: Path) -> Path | None:
    """
    Return the nearest '.pymocks/config.{toml,yaml,yml}' walking upward from 'start'.
    """
    cur = start.resolve()
    for p in [cur, *cur.parents]:
        cand = _first_existing([p / ".pymocks" / n for n in _NAMES])
        if cand:
            _log.info("project config: %s", cand)
            return cand
    return None


def _find_user_config() -> Path | None:
    """
    Return the user-level config in precedence order:
      1) $PYMOCKS_CONFIG            (exact path)
      2) $XDG_CONFIG_HOME/pymocks/config.{toml,yaml,yml}
      3) ~/.config/pymocks/config.{toml,yaml,yml}
      4) ~/.pymocks/config.{toml,yaml,yml}
    """
    env_path = os.getenv("PYMOCKS_CONFIG")
    if env_path:
        env_cand = Path(env_path).expanduser()
        if env_cand.is_file():
            _log.info("user config via PYMOCKS_CONFIG=%s", env_cand)
            return env_cand

    xdg_home = os.getenv("XDG_CONFIG_HOME")
    if xdg_home:
        cand = _first_existing([Path(xdg_home) / "pymocks" / n for n in _NAMES])
        if cand:
            _log.info("user config via XDG: %s", cand)
            return cand

    for base in (Path.home() / ".config" / "pymocks", Path.home() / ".pymocks"):
        cand = _first_existing([base / n for n in _NAMES])
        if cand:
            _log.info("user config: %s", cand)
            return cand

    return None


# ---------- Parsers ----------


def _load_toml_text(txt: str) -> Dict[str, Any]:
    try:
        return tomllib.loads(txt)
    except Exception as exc:
        _log.warning("Failed to parse TOML: %s", exc)
        return {}


def _load_yaml_text(txt: str) -> Dict[str, Any]:
    import yaml  # PyYAML

    try:
        data = yaml.safe_load(txt) or {}
    except Exception as exc:
        _log.warning("Failed to parse YAML: %s", exc)
        return {}
    if not isinstance(data, dict):
        _log.warning("YAML config root is not a mapping; ignoring.")
        return {}
    return data


def _parse_config_file(path: Path) -> Dict[str, Any]:
    txt = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        return _load_toml_text(txt) or {}
    if suffix in (".yaml", ".yml"):
        return _load_yaml_text(txt) or {}
    _log.warning("Unknown config extension '%s' for %s; ignoring.", suffix, path)
    return {}


# ---------- Merging & coercion ----------


def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep-merge two dicts: values in 'b' override 'a'; nested dicts are merged recursively.
    """
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def coerce_log_level(value: Any) -> int:
    """Accept 10 / "10" / "debug" / "DEBUG"."""
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log_level {value!r}")
    return level


def _coerce_types(d: Dict[str, Any]) -> Dict[str, Any]:
    """
    Coerce the known fields so downstream code gets stable types.
      - backend:   lower-case str, one of "auto" or BACKEND_NAMES
      - log_level: int
    """
    out = dict(d)

    if "backend" in out:
        name = str(out["backend"] or "auto").strip().lower()
        if name != "auto" and name not in BACKEND_NAMES:
            raise ConfigError(
                "Unknown backend '{}'. Available: {}".format(name, ["auto", *BACKEND_NAMES])
            )
        out["backend"] = name

    if out.get("log_level") is not None:
        out["log_level"] = coerce_log_level(out["log_level"])

    return out


def _effective(section: str, raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    effective = deep_merge(raw['defaults'] or {}, raw[section] or {}), then coerced.
    """
    eff = _deep_merge(raw.get("defaults", {}) or {}, raw.get(section, {}) or {})
    eff = _coerce_types(eff)
    _log.info("Effective config for [%s]: %s", section, eff if eff else "{}")
    return eff


# ---------- Loader (layering: embedded < user < project) ----------


def _load_default_config(start: Path | None = None) -> Dict[str, Any]:
    """
    Layered load:
      base = packaged defaults (pymocks/default_config.toml)
      base ← deep-merge user-level config (if any)
      base ← deep-merge nearest project config (if any)
    """
    global LAST_CONFIG_PATH

    # 1) Packaged defaults (TOML)
    base: Dict[str, Any] = {}
    try:
        txt = ir.files("pymocks").joinpath("default_config.toml").read_text(encoding="utf-8")
        base = _load_toml_text(txt) or {}
    except Exception as exc:
        _log.info("No packaged defaults available: %s", exc)

    # 2) User-level (global) config
    user_cfg_path = _find_user_config()
    if user_cfg_path:
        try:
            base = _deep_merge(base, _parse_config_file(user_cfg_path))
        except OSError as exc:
            _log.warning("Failed to read user config %s: %s", user_cfg_path, exc)

    # 3) Project-local (most specific) config
    proj_cfg_path = _find_project_config((start or Path.cwd()).resolve())
    if proj_cfg_path:
        try:
            base = _deep_merge(base, _parse_config_file(proj_cfg_path))
        except OSError as exc:
            _log.warning("Failed to read project config %s: %s", proj_cfg_path, exc)
        LAST_CONFIG_PATH = proj_cfg_path
    else:
        LAST_CONFIG_PATH = None

    return base


def get_effective_config(section: str = "mock", start: Path | None = None) -> Dict[str, Any]:
    """
    Return the effective config dict for a section (normally "mock"):
    [defaults] -> [section] over the layered configuration, then coerced.
    Raises ConfigError for values that cannot be coerced.
    """
    raw = _load_default_config(start)
    if not raw:
        _log.info("get_effective_config(%s): no config found.", section)
        return {}
    return _effective(section, raw)
