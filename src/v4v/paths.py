from __future__ import annotations

from pathlib import Path
from typing import Mapping

SPLITS_CONFIG_ENV_KEY = "V4V_SPLITS_CONFIG"


def resolve_split_config_path(cli_value: Path | None, cwd: Path, environ: Mapping[str, str] | None = None) -> Path:
    if cli_value is not None:
        return cli_value

    env_value = (environ or {}).get(SPLITS_CONFIG_ENV_KEY)
    if env_value:
        return Path(env_value).expanduser()

    yml = cwd / "splits.yml"
    yaml = cwd / "splits.yaml"
    if yml.exists():
        return yml
    if yaml.exists():
        return yaml
    return yml
