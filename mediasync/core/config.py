# mediasync/core/config.py
# Loads mediasync settings from a TOML file (defaults + overrides).
# - Reads --config, then MEDIASYNC_CONFIG, then mediasync.toml from the CWD upwards
# - Missing or unreadable files fall back to the built-in defaults
# - CLI flags override whatever ends up here (see mediasync/cli.py)

from __future__ import annotations
from pathlib import Path
import os
from typing import Optional
import tomli as tomllib  # py3.11+: tomllib in stdlib; using tomli for compatibility


CONFIG_NAME = "mediasync.toml"
CONFIG_ENV = "MEDIASYNC_CONFIG"


# -------------------- Defaults (used if TOML omits keys) --------------------
_DEFAULTS = {
    "paths": {
        "source": "",
        "destination": "",
    },
    "sync": {
        "condition": "",
        "difference": False,
        "simulate": False,
        "progress_size": False,
        "assume_yes": False,
    },
    "logging": {
        # relative paths resolve against the CWD
        "log_file": "mediasync.log",
    },
}


# -------------------- Read + merge TOML --------------------

def find_config_path(explicit: Optional[str] = None) -> Path | None:
    """Find mediasync.toml without user input.
    Priority:
      1) explicit path (--config)
      2) MEDIASYNC_CONFIG
      3) ./mediasync.toml (CWD)
      4) ascend parents from CWD looking for mediasync.toml
    """
    # 1) Explicit path wins even if missing; load_config_toml() then yields {}
    if explicit:
        return Path(explicit).expanduser()

    # 2) Explicit env
    cfg_env = os.getenv(CONFIG_ENV)
    if cfg_env:
        p = Path(cfg_env).expanduser()
        if p.exists():
            return p

    # 3) + 4) CWD, then walk up to root
    cur = Path.cwd()
    while True:
        candidate = cur / CONFIG_NAME
        if candidate.exists():
            return candidate
        if cur.parent == cur:
            break  # reached filesystem root
        cur = cur.parent

    return None


def load_config_toml(path: Path | None) -> dict:
    """Load TOML from path; return {} on missing file or parse error."""
    if not path or not path.exists():
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, ValueError):  # TOMLDecodeError and bad UTF-8 are both ValueErrors
        return {}


# -------------------- Settings container --------------------
class Settings:
    """
    Effective configuration: defaults merged with the TOML sections.
    Paths stay as given (strings); the CLI resolves them after overrides.
    """
    def __init__(self, cfg: dict, source_file: Path | None = None) -> None:
        paths = {**_DEFAULTS["paths"], **(cfg.get("paths") or {})}
        sync = {**_DEFAULTS["sync"], **(cfg.get("sync") or {})}
        logs = {**_DEFAULTS["logging"], **(cfg.get("logging") or {})}

        self.source_file = source_file

        self.source: str = str(paths.get("source") or "").strip()
        self.destination: str = str(paths.get("destination") or "").strip()

        self.condition: str = str(sync.get("condition") or "").strip()
        self.difference: bool = bool(sync.get("difference", False))
        self.simulate: bool = bool(sync.get("simulate", False))
        self.progress_size: bool = bool(sync.get("progress_size", False))
        self.assume_yes: bool = bool(sync.get("assume_yes", False))

        self.log_file: str = str(logs.get("log_file") or _DEFAULTS["logging"]["log_file"])

    def __repr__(self) -> str:
        return (
            f"Settings(source_file={self.source_file}, source={self.source!r}, "
            f"destination={self.destination!r}, condition={self.condition!r}, "
            f"difference={self.difference}, simulate={self.simulate}, "
            f"progress_size={self.progress_size}, assume_yes={self.assume_yes}, "
            f"log_file={self.log_file!r})"
        )


def load_settings(explicit: Optional[str] = None) -> Settings:
    """Locate, read and merge the config file into a Settings object."""
    path = find_config_path(explicit)
    return Settings(load_config_toml(path), source_file=path if path and path.exists() else None)
