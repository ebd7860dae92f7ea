from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from v4v.models import AppConfig, KeysendAddress, RemoteSplitConfig, SplitConfig, ValueRecipient
from v4v.utils import clean_text

SUPPORTED_CONFIG_VERSION = 1
MAX_PERCENTAGE = 100
DEFAULT_APP_LOG_PATH = Path("~/.v4v/v4v.log").expanduser()


class ConfigError(ValueError):
    pass


def _config_error(message: str) -> ConfigError:
    return ConfigError(f"Invalid splits config: {message}")


def _format_yaml_error(exc: Exception) -> str:
    mark = getattr(exc, "problem_mark", None)
    if mark is None:
        return "YAML syntax is invalid."
    return f"YAML syntax is invalid near line {mark.line + 1}, column {mark.column + 1}."


def load_config(path: Path) -> SplitConfig:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise _config_error(_format_yaml_error(exc)) from exc
    except OSError as exc:
        raise _config_error(f"Could not read '{path}': {exc.strerror or exc}.") from exc
    if not isinstance(raw, dict):
        raise _config_error("The root value must be a mapping/object.")

    version = _required_int(raw, "version")
    if version != SUPPORTED_CONFIG_VERSION:
        raise _config_error(f"Unsupported version '{version}'. Expected version '{SUPPORTED_CONFIG_VERSION}'.")

    app_raw = raw.get("app", {})
    if not isinstance(app_raw, dict):
        raise _config_error("The 'app' section must be a mapping/object when provided.")
    log_path = _optional_str(app_raw, "log_path")
    app = AppConfig(log_path=Path(log_path).expanduser() if log_path else DEFAULT_APP_LOG_PATH)

    recipients = _parse_recipients(raw.get("recipients"), section="recipients")
    remote = _parse_remote(raw.get("remote"))

    return SplitConfig(version=version, recipients=recipients, app=app, remote=remote)


def _parse_remote(raw: Any) -> RemoteSplitConfig | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise _config_error("The 'remote' section must be a mapping/object when provided.")

    percentage = _required_non_negative_int(raw, "percentage")
    if percentage > MAX_PERCENTAGE:
        raise _config_error(f"'remote.percentage' must be between 0 and {MAX_PERCENTAGE}.")

    return RemoteSplitConfig(
        percentage=percentage,
        recipients=_parse_recipients(raw.get("recipients"), section="remote.recipients"),
    )


def _parse_recipients(raw: Any, section: str) -> list[ValueRecipient]:
    if not isinstance(raw, list) or not raw:
        raise _config_error(f"'{section}' must be a non-empty list.")
    recipients = [_parse_recipient(item, section) for item in raw]

    fee_total = sum(r.split for r in recipients if r.fee)
    if fee_total > MAX_PERCENTAGE:
        raise _config_error(f"Fee recipients in '{section}' add up to {fee_total}%, more than 100%.")
    return recipients


def _parse_recipient(raw: Any, section: str) -> ValueRecipient:
    if not isinstance(raw, dict):
        raise _config_error(f"Each item in '{section}' must be a mapping/object.")

    custom_key = _optional_str(raw, "custom_key")
    custom_value = _optional_str(raw, "custom_value")
    if (custom_key is None) != (custom_value is None):
        raise _config_error("'custom_key' and 'custom_value' must be provided together.")

    fee = _optional_bool(raw, "fee")
    split = _required_non_negative_int(raw, "split")
    if fee and split > MAX_PERCENTAGE:
        raise _config_error(f"'split' of a fee recipient is a percentage and must not exceed {MAX_PERCENTAGE}.")

    return ValueRecipient(
        name=clean_text(_required_str(raw, "name")),
        address=KeysendAddress(
            pubkey=_required_str(raw, "address"),
            custom_key=custom_key,
            custom_value=custom_value,
        ),
        split=split,
        fee=fee,
    )


def _required_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise _config_error(f"'{key}' must be a non-empty string.")
    return value.strip()


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        # Custom record keys such as 696969 are commonly written unquoted.
        return str(value)
    if not isinstance(value, str) or not value.strip():
        raise _config_error(f"'{key}' must be a non-empty string when provided.")
    return value.strip()


def _required_int(raw: dict[str, Any], key: str) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise _config_error(f"'{key}' must be an integer.")
    return value


def _required_non_negative_int(raw: dict[str, Any], key: str) -> int:
    value = raw.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise _config_error(f"'{key}' must be a non-negative integer.")
    return value


def _optional_bool(raw: dict[str, Any], key: str) -> bool:
    value = raw.get(key, False)
    if not isinstance(value, bool):
        raise _config_error(f"'{key}' must be true or false when provided.")
    return value
