from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from apps.tracker.settings import TrackerSettings

ENV_PREFIX = "ROIT_"

# fields that stay strings even when written as numbers (camera index 0)
STRING_FIELDS = ("source", "output", "fourcc", "window_name", "telem_bind")

# --- paths --------------------------------------------------------------------


def _repo_root() -> Path:
    """Heuristic: walk up from this file until we find pyproject.toml."""
    p = Path(__file__).resolve()
    for ancestor in [p, *p.parents]:
        if (ancestor / "pyproject.toml").exists():
            return ancestor
    return Path.cwd()


def _profiles_dir(env: Mapping[str, str]) -> Path:
    # Allow override (useful for tests): ROIT_CONFIG_DIR points *at* profiles/
    override = env.get(f"{ENV_PREFIX}CONFIG_DIR")
    if override:
        return Path(override)
    return _repo_root() / "configs" / "profiles"


def _load_profile_table(env: Mapping[str, str], profile: str) -> dict[str, Any]:
    f = _profiles_dir(env) / f"{profile}.toml"
    if not f.exists():
        return {}
    text = f.read_text("utf-8")
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise RuntimeError(f"Failed to parse profile TOML: {f}") from e


# --- env overlay helpers ------------------------------------------------------


def _coerce_env_value(raw: str) -> Any:
    """
    Try to parse JSON first (so numbers/bools work),
    then fall back to the original string.
    """
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _collect_env_for(
    fields: set[str], env: Mapping[str, str], prefix: str = ENV_PREFIX
) -> dict[str, Any]:
    """
    Collect overrides like ROIT_SOURCE, ROIT_FRAME_WIDTH -> {'source': '...'}.
    Case-insensitive; underscores only.
    """
    out: dict[str, Any] = {}
    upper_to_field = {f.upper(): f for f in fields}
    plen = len(prefix)
    for k, v in env.items():
        if not k.upper().startswith(prefix):
            continue
        key = k[plen:].upper()
        if key in upper_to_field:
            out[upper_to_field[key]] = _coerce_env_value(v)
    return out


def _stringify_fields(values: dict[str, Any]) -> dict[str, Any]:
    for key in STRING_FIELDS:
        if key in values and not isinstance(values[key], str):
            values[key] = json.dumps(values[key])
    return values


# --- public API ---------------------------------------------------------------


def load_tracker_settings(
    env: Mapping[str, str] | None = None,
    profile: str | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> TrackerSettings:
    """
    Merge defaults (TrackerSettings) <- TOML [tracker] <- env ROIT_* <- overrides.
    Env examples: ROIT_SOURCE=0, ROIT_FRAME_WIDTH=1280, ROIT_DISPLAY=false.
    ``overrides`` carries CLI flags; ``None`` values are ignored.
    """
    env = os.environ if env is None else env
    profile = (profile or env.get(f"{ENV_PREFIX}PROFILE") or "dev").strip()

    # start from field defaults (no implicit env read here)
    base = {
        name: f.get_default(call_default_factory=True)
        for name, f in TrackerSettings.model_fields.items()
    }

    # TOML overlay
    toml_table = _load_profile_table(env, profile)
    toml_tracker = toml_table.get("tracker", {}) if isinstance(toml_table, dict) else {}
    if isinstance(toml_tracker, dict):
        base.update(_stringify_fields(dict(toml_tracker)))

    # env overlay
    env_over = _collect_env_for(set(base.keys()), env)
    base.update(_stringify_fields(env_over))

    if overrides:
        base.update({k: v for k, v in overrides.items() if v is not None})

    # validate
    return TrackerSettings.model_validate(base)
