from __future__ import annotations

import math
from dataclasses import replace
from typing import Any, Protocol, Sequence, TypeVar

from v4v.allocator import InvalidInputError, compute_allocations
from v4v.models import GenericRecipient, PercentageBased, ShareBased, ValueRecipient

MAX_PERCENTAGE = 100


class SplitConversionError(ValueError):
    pass


class HasSplit(Protocol):
    split: int


SplitT = TypeVar("SplitT", bound=HasSplit)


def fee_recipients_to_splits(recipients: Sequence[GenericRecipient]) -> list[int]:
    """Convert share- and percentage-based recipients into share-like splits.

    Percentage recipients end up with exactly their percentage of the total, and
    share recipients keep the same ratios between themselves in what is left.
    ``[ShareBased(50), ShareBased(50), PercentageBased(1)]`` becomes ``[99, 99, 2]``.
    """
    for idx, recipient in enumerate(recipients):
        if isinstance(recipient, ShareBased):
            _require_non_negative_int(f"num_shares at index {idx}", recipient.num_shares)
        elif isinstance(recipient, PercentageBased):
            _require_non_negative_int(f"percentage at index {idx}", recipient.percentage)
        else:
            raise InvalidInputError(f"Unsupported recipient type at index {idx}: {type(recipient).__name__}.")

    total_percentage = sum(r.percentage for r in recipients if isinstance(r, PercentageBased))
    if total_percentage > MAX_PERCENTAGE:
        raise SplitConversionError(f"Total fees exceed 100% ({total_percentage}%).")

    share_recipients = [r for r in recipients if isinstance(r, ShareBased)]
    if total_percentage == MAX_PERCENTAGE and share_recipients:
        raise SplitConversionError("Total fees equal 100%, but non-fee recipients exist.")

    remaining_percentage = MAX_PERCENTAGE - total_percentage
    total_shares = sum(r.num_shares for r in share_recipients)

    result: list[int] = []
    for recipient in recipients:
        if isinstance(recipient, ShareBased):
            result.append(recipient.num_shares * remaining_percentage)
        elif total_shares > 0:
            result.append(recipient.percentage * total_shares)
        else:
            result.append(recipient.percentage)

    return _normalize(result)


def use_remote_splits(
    local_splits: Sequence[int], remote_splits: Sequence[int], remote_percentage: int
) -> tuple[list[int], list[int]]:
    """Scale splits so ``remote_splits`` make up ``remote_percentage`` of the total.

    ``use_remote_splits([50, 50], [1], 90)`` returns ``([1, 1], [18])``.
    """
    for idx, split in enumerate(local_splits):
        _require_non_negative_int(f"local split at index {idx}", split)
    for idx, split in enumerate(remote_splits):
        _require_non_negative_int(f"remote split at index {idx}", split)
    _require_non_negative_int("remote_percentage", remote_percentage)

    remote_percentage = min(remote_percentage, MAX_PERCENTAGE)
    local_percentage = MAX_PERCENTAGE - remote_percentage
    total_local = sum(local_splits)
    total_remote = sum(remote_splits)

    if total_local == 0 or total_remote == 0:
        scaled_local = list(local_splits)
        scaled_remote = list(remote_splits)
    else:
        scaled_local = [split * local_percentage * total_remote for split in local_splits]
        scaled_remote = [split * remote_percentage * total_local for split in remote_splits]

    normalized = _normalize(scaled_local + scaled_remote)
    return normalized[: len(scaled_local)], normalized[len(scaled_local) :]


def compute_sat_recipients_generic(values: Sequence[HasSplit], total_sats: int) -> list[int]:
    return compute_allocations([value.split for value in values], total_sats)


def fee_recipients_to_splits_generic(recipients: Sequence[ValueRecipient]) -> list[ValueRecipient]:
    generic: list[GenericRecipient] = [
        PercentageBased(percentage=r.split) if r.fee else ShareBased(num_shares=r.split) for r in recipients
    ]
    splits = fee_recipients_to_splits(generic)
    return [replace(recipient, split=split, fee=False) for recipient, split in zip(recipients, splits)]


def use_remote_splits_generic(
    local_values: Sequence[SplitT], remote_values: Sequence[SplitT], remote_percentage: int
) -> list[SplitT]:
    local_splits, remote_splits = use_remote_splits(
        [value.split for value in local_values],
        [value.split for value in remote_values],
        remote_percentage,
    )
    result: list[SplitT] = []
    for value, split in zip(local_values, local_splits):
        result.append(replace(value, split=split))  # type: ignore[type-var]
    for value, split in zip(remote_values, remote_splits):
        result.append(replace(value, split=split))  # type: ignore[type-var]
    return result


def _normalize(values: list[int]) -> list[int]:
    divisor = math.gcd(*(value for value in values if value != 0))
    if divisor <= 1:
        return values
    return [value // divisor for value in values]


def _require_non_negative_int(label: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{label} must be an integer, got {type(value).__name__}.")
    if value < 0:
        raise InvalidInputError(f"{label} must be non-negative, got {value}.")
