from pathlib import Path

from v4v.paths import SPLITS_CONFIG_ENV_KEY, resolve_split_config_path


def test_resolve_split_config_path_prefers_cli_value(tmp_path: Path) -> None:
    explicit = tmp_path / "explicit.yaml"
    environ = {SPLITS_CONFIG_ENV_KEY: str(tmp_path / "env.yaml")}

    assert resolve_split_config_path(explicit, tmp_path, environ) == explicit


def test_resolve_split_config_path_uses_environment_before_cwd(tmp_path: Path) -> None:
    (tmp_path / "splits.yml").write_text("version: 1\n", encoding="utf-8")
    environ = {SPLITS_CONFIG_ENV_KEY: str(tmp_path / "env.yaml")}

    assert resolve_split_config_path(None, tmp_path, environ) == tmp_path / "env.yaml"


def test_resolve_split_config_path_finds_yaml_extension(tmp_path: Path) -> None:
    (tmp_path / "splits.yaml").write_text("version: 1\n", encoding="utf-8")

    assert resolve_split_config_path(None, tmp_path, {}) == tmp_path / "splits.yaml"


def test_resolve_split_config_path_defaults_to_yml(tmp_path: Path) -> None:
    assert resolve_split_config_path(None, tmp_path) == tmp_path / "splits.yml"
