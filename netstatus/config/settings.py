"""Config for lease source, ndp command and status server.

Defaults: loaded from config/config.yaml.example (single source of truth, no code-level defaults).
User config is deep-merged over the example; a few env vars override single keys.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
EXAMPLE_CONFIG_PATH = _PROJECT_ROOT / "config" / "config.yaml.example"

# Lazy-loaded example config (single source of truth for defaults)
_EXAMPLE_CONFIG: Optional[Dict[str, Any]] = None


def _load_example_config() -> Dict[str, Any]:
    """Load config.yaml.example as defaults. No code-level defaults."""
    global _EXAMPLE_CONFIG
    if _EXAMPLE_CONFIG is None:
        with open(EXAMPLE_CONFIG_PATH, encoding="utf-8") as f:
            _EXAMPLE_CONFIG = yaml.safe_load(f) or {}
    return _EXAMPLE_CONFIG


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base. Override values take precedence."""
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _merged_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Merge config with example so missing keys come from config file."""
    return _deep_merge(_load_example_config(), cfg)


def _section(cfg: Dict[str, Any], section: str) -> Dict[str, Any]:
    s = cfg.get(section)
    return s if isinstance(s, dict) else {}


def _env_overrides(environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """NETSTATUS_LEASES_FILE, NETSTATUS_HOST, NETSTATUS_PORT -> partial config dict."""
    env = os.environ if environ is None else environ
    out: Dict[str, Any] = {}
    if env.get("NETSTATUS_LEASES_FILE"):
        out.setdefault("leases", {})["path"] = env["NETSTATUS_LEASES_FILE"]
    if env.get("NETSTATUS_HOST"):
        out.setdefault("status_server", {})["host"] = env["NETSTATUS_HOST"]
    if env.get("NETSTATUS_PORT"):
        out.setdefault("status_server", {})["port"] = int(env["NETSTATUS_PORT"])
    return out


def read_config(
    config_path: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None,
) -> Tuple[Dict[str, Any], str]:
    """Load YAML config with env overrides. Returns (config, resolved_path).

    Path: argument, else $NETSTATUS_CONFIG, else config/config.yaml; falls back to the example.
    """
    env = os.environ if environ is None else environ
    config_path = config_path or env.get("NETSTATUS_CONFIG") or str(_PROJECT_ROOT / "config" / "config.yaml")
    if not Path(config_path).exists():
        config_path = str(EXAMPLE_CONFIG_PATH)
    config_path = str(Path(config_path).resolve())
    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}
    return _deep_merge(config, _env_overrides(env)), config_path


def get_leases_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return {"path", "strict"} from the leases section."""
    merged = _merged_config(config or {})
    s = _section(merged, "leases")
    return {
        "path": s.get("path"),
        "strict": bool(s.get("strict")),
    }


def get_ndp_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return {"command", "timeout_sec"}. A string command is split on whitespace."""
    merged = _merged_config(config or {})
    s = _section(merged, "ndp")
    command = s.get("command")
    if isinstance(command, str):
        command = command.split()
    timeout = s.get("timeout_sec")
    return {
        "command": [str(c) for c in (command or [])],
        "timeout_sec": float(timeout) if timeout is not None else None,
    }


def get_server_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return {"host", "port"} for the status server."""
    merged = _merged_config(config or {})
    s = _section(merged, "status_server")
    return {
        "host": s.get("host"),
        "port": int(s["port"]) if s.get("port") is not None else None,
    }
