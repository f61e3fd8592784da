from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from apps.reporter.settings import ReporterSettings
from shared.errors import ConfigurationError

ENV_PREFIX: Final = "PSR_"
DEFAULT_PROFILE: Final = "dev"

# Values that must never be JSON-coerced: "c123" is fine, but "0" or "123"
# would otherwise turn into ints.
_VERBATIM_FIELDS: Final = frozenset(
    {"customer_id", "topic", "bootstrap_servers", "endpoint_host", "host_id"}
)


def _repo_root() -> Path:
    """Nearest ancestor of this file holding pyproject.toml (else cwd)."""
    here = Path(__file__).resolve()
    for ancestor in here.parents:
        if (ancestor / "pyproject.toml").exists():
            return ancestor
    return Path.cwd()


def _profiles_dir(env: Mapping[str, str]) -> Path:
    # PSR_CONFIG_DIR points *at* profiles/
    override = env.get(f"{ENV_PREFIX}CONFIG_DIR")
    return Path(override) if override else _repo_root() / "configs" / "profiles"


def _read_reporter_table(env: Mapping[str, str], profile: str) -> dict[str, Any]:
    path = _profiles_dir(env) / f"{profile}.toml"
    if not path.exists():
        return {}
    try:
        doc = tomllib.loads(path.read_text("utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse profile TOML: {path}: {e}", "profile") from e
    table = doc.get("reporter", {})
    return table if isinstance(table, dict) else {}


def _env_value(field: str, raw: str) -> Any:
    if field in _VERBATIM_FIELDS:
        return raw
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _env_overrides(fields: set[str], env: Mapping[str, str]) -> dict[str, Any]:
    """PSR_REPORT_INTERVAL_HOURS=6 -> {'report_interval_hours': 6}; case-insensitive."""
    by_upper = {f.upper(): f for f in fields}
    out: dict[str, Any] = {}
    for key, raw in env.items():
        upper = key.upper()
        if not upper.startswith(ENV_PREFIX):
            continue
        field = by_upper.get(upper[len(ENV_PREFIX) :])
        if field is not None:
            out[field] = _env_value(field, raw)
    return out


def load_reporter_settings(
    env: Mapping[str, str] | None = None, profile: str | None = None
) -> ReporterSettings:
    """
    Merge defaults (ReporterSettings) <- TOML [reporter] <- env PSR_*.
    Env examples: PSR_CUSTOMER_ID=c42, PSR_REPORT_INTERVAL_HOURS=6, PSR_TOPIC=""
    """
    env = os.environ if env is None else env
    profile = (profile or env.get(f"{ENV_PREFIX}PROFILE") or DEFAULT_PROFILE).strip()

    # model defaults only; constructing ReporterSettings() would read os.environ
    values: dict[str, Any] = {
        name: f.get_default(call_default_factory=True)
        for name, f in ReporterSettings.model_fields.items()
    }
    values.update(_read_reporter_table(env, profile))
    values.update(_env_overrides(set(values), env))
    return ReporterSettings.model_validate(values)
