from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class KeysendAddress:
    pubkey: str
    custom_key: str | None = None
    custom_value: str | None = None


@dataclass(frozen=True)
class ValueRecipient:
    name: str
    address: KeysendAddress
    split: int
    fee: bool = False


@dataclass(frozen=True)
class ShareBased:
    num_shares: int


@dataclass(frozen=True)
class PercentageBased:
    percentage: int


GenericRecipient = Union[ShareBased, PercentageBased]


@dataclass(frozen=True)
class RemoteSplitConfig:
    percentage: int
    recipients: list[ValueRecipient]


@dataclass(frozen=True)
class AppConfig:
    log_path: Path | None = None


@dataclass(frozen=True)
class SplitConfig:
    version: int
    recipients: list[ValueRecipient]
    app: AppConfig = field(default_factory=AppConfig)
    remote: RemoteSplitConfig | None = None


@dataclass(frozen=True)
class PaymentRecipientInfo:
    address: KeysendAddress
    num_sats: int
    split: int
    name: str | None = None


@dataclass(frozen=True)
class PaymentPlan:
    total_sats: int
    recipients: tuple[PaymentRecipientInfo, ...]
