from pathlib import Path

import pytest

from v4v.config import DEFAULT_APP_LOG_PATH, ConfigError, load_config
from v4v.models import KeysendAddress


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "splits.yaml"
    path.write_text(text.strip(), encoding="utf-8")
    return path


def test_load_config_parses_recipients_fees_and_remote(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
version: 1
app:
  log_path: "logs/v4v.log"
recipients:
  - name: "  The   Host "
    address: "03ae9f91a0cb8ff43840e3c322c4c61f019d8c1c3cea15a25cfc425ac605e61a4a"
    custom_key: 696969
    custom_value: "wallet-1"
    split: 95
  - name: "App"
    address: "02pubkey"
    split: 5
    fee: true
remote:
  percentage: 90
  recipients:
    - name: "Guest"
      address: "03guest"
      split: 1
""",
    )

    cfg = load_config(path)

    assert cfg.version == 1
    assert cfg.app.log_path == Path("logs/v4v.log")
    assert len(cfg.recipients) == 2
    host = cfg.recipients[0]
    assert host.name == "The Host"
    assert host.address == KeysendAddress(
        pubkey="03ae9f91a0cb8ff43840e3c322c4c61f019d8c1c3cea15a25cfc425ac605e61a4a",
        custom_key="696969",
        custom_value="wallet-1",
    )
    assert host.split == 95
    assert host.fee is False
    assert cfg.recipients[1].fee is True
    assert cfg.remote is not None
    assert cfg.remote.percentage == 90
    assert [r.name for r in cfg.remote.recipients] == ["Guest"]


def test_load_config_defaults_log_path_and_remote(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
version: 1
recipients:
  - name: "Host"
    address: "03host"
    split: 1
""",
    )

    cfg = load_config(path)

    assert cfg.app.log_path == DEFAULT_APP_LOG_PATH
    assert cfg.remote is None


def test_load_config_reports_yaml_syntax_location(tmp_path: Path) -> None:
    path = _write(tmp_path, "version: 1\nrecipients: [\n")

    with pytest.raises(ConfigError, match="Invalid splits config: YAML syntax is invalid near line"):
        load_config(path)


def test_load_config_rejects_unsupported_version(tmp_path: Path) -> None:
    path = _write(tmp_path, "version: 2\nrecipients: []\n")

    with pytest.raises(ConfigError, match="Unsupported version '2'"):
        load_config(path)


def test_load_config_requires_recipients(tmp_path: Path) -> None:
    path = _write(tmp_path, "version: 1\nrecipients: []\n")

    with pytest.raises(ConfigError, match="'recipients' must be a non-empty list"):
        load_config(path)


def test_load_config_rejects_negative_split(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
version: 1
recipients:
  - name: "Host"
    address: "03host"
    split: -5
""",
    )

    with pytest.raises(ConfigError, match="'split' must be a non-negative integer"):
        load_config(path)


def test_load_config_requires_custom_key_and_value_together(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
version: 1
recipients:
  - name: "Host"
    address: "03host"
    custom_key: "696969"
    split: 1
""",
    )

    with pytest.raises(ConfigError, match="provided together"):
        load_config(path)


def test_load_config_rejects_fee_totals_over_100(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
version: 1
recipients:
  - name: "App"
    address: "03app"
    split: 60
    fee: true
  - name: "Host"
    address: "03host"
    split: 50
    fee: true
""",
    )

    with pytest.raises(ConfigError, match="add up to 110%"):
        load_config(path)


def test_load_config_rejects_remote_percentage_over_100(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
version: 1
recipients:
  - name: "Host"
    address: "03host"
    split: 1
remote:
  percentage: 101
  recipients:
    - name: "Guest"
      address: "03guest"
      split: 1
""",
    )

    with pytest.raises(ConfigError, match="remote.percentage"):
        load_config(path)


def test_load_config_rejects_non_boolean_fee(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
version: 1
recipients:
  - name: "Host"
    address: "03host"
    split: 1
    fee: "yes please"
""",
    )

    with pytest.raises(ConfigError, match="'fee' must be true or false"):
        load_config(path)
