from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from v4v.allocator import compute_allocations_for, count_nonzero_weights
from v4v.config import load_config
from v4v.logger import append_log_event
from v4v.models import PaymentPlan, PaymentRecipientInfo, SplitConfig, ValueRecipient
from v4v.splits import fee_recipients_to_splits_generic, use_remote_splits_generic
from v4v.utils import now_local_iso, sats_to_millisats


def plan_payment(
    config_path: Path,
    total_sats: int,
    log_path: Path | None = None,
    log_to_stdout: bool = False,
) -> PaymentPlan:
    log_target = None if log_to_stdout else log_path
    try:
        config = load_config(config_path)
        if not log_to_stdout and log_path is None:
            log_target = config.app.log_path
        plan = build_payment_plan(config, total_sats)
    except Exception as exc:
        append_log_event(
            log_target,
            {
                "timestamp": now_local_iso(),
                "event_name": "split_plan_failed",
                "config_path": str(config_path),
                "total_sats": total_sats,
                "status": "failed",
                "error_message": str(exc),
            },
        )
        raise

    event = {
        "timestamp": now_local_iso(),
        "event_name": "split_planned",
        "config_path": str(config_path),
        "status": "planned",
        **payment_plan_to_dict(plan),
    }
    append_log_event(log_target, event)
    return plan


def build_payment_plan(config: SplitConfig, total_sats: int) -> PaymentPlan:
    recipients: list[ValueRecipient] = fee_recipients_to_splits_generic(config.recipients)
    if config.remote is not None:
        remote = fee_recipients_to_splits_generic(config.remote.recipients)
        recipients = use_remote_splits_generic(recipients, remote, config.remote.percentage)

    allocated = compute_allocations_for(recipients, [r.split for r in recipients], total_sats)
    lines = tuple(
        PaymentRecipientInfo(
            address=recipient.address,
            num_sats=num_sats,
            split=recipient.split,
            name=recipient.name,
        )
        for recipient, num_sats in allocated
    )
    return PaymentPlan(total_sats=total_sats, recipients=lines)


def clip_recipients_at_amount(
    total_sats: int, recipients: Sequence[PaymentRecipientInfo]
) -> list[PaymentRecipientInfo]:
    """Keep recipients, in order, until the running sat total would exceed ``total_sats``."""
    sats_sent = 0
    clipped: list[PaymentRecipientInfo] = []

    for recipient in recipients:
        sats_sent += recipient.num_sats
        if sats_sent > total_sats:
            break
        clipped.append(recipient)

    return clipped


def payment_plan_to_dict(plan: PaymentPlan) -> dict[str, Any]:
    splits = [recipient.split for recipient in plan.recipients]
    return {
        "total_sats": plan.total_sats,
        "total_millisats": sats_to_millisats(plan.total_sats),
        "distributed_sats": sum(recipient.num_sats for recipient in plan.recipients),
        "min_one_sat_guaranteed": plan.total_sats >= count_nonzero_weights(splits),
        "recipients": [_recipient_to_dict(recipient) for recipient in plan.recipients],
    }


def _recipient_to_dict(recipient: PaymentRecipientInfo) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": recipient.name,
        "pubkey": recipient.address.pubkey,
        "split": recipient.split,
        "num_sats": recipient.num_sats,
    }
    if recipient.address.custom_key is not None:
        payload["custom_key"] = recipient.address.custom_key
        payload["custom_value"] = recipient.address.custom_value
    return payload
