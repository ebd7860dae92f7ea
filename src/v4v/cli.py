from __future__ import annotations

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path

from v4v.allocator import InvalidInputError
from v4v.config import ConfigError
from v4v.logger import print_structured_stdout
from v4v.models import PaymentRecipientInfo
from v4v.paths import SPLITS_CONFIG_ENV_KEY, resolve_split_config_path
from v4v.service import clip_recipients_at_amount, payment_plan_to_dict, plan_payment
from v4v.splits import SplitConversionError
from v4v.utils import millisats_to_sats


def main() -> int:
    parser = _build_arg_parser()
    args = parser.parse_args()
    config_path = resolve_split_config_path(args.config, Path.cwd(), os.environ)

    if not config_path.exists():
        parser.error(
            f"Splits config not found at '{config_path}'. "
            f"Provide --config, set {SPLITS_CONFIG_ENV_KEY}, or create splits.yml or splits.yaml in the working directory."
        )
    if args.amount < 0:
        parser.error("amount must be a non-negative integer.")
    if args.max_sats is not None and args.max_sats < 0:
        parser.error("max-sats must be a non-negative integer.")

    total_sats = millisats_to_sats(args.amount) if args.msat else args.amount

    try:
        plan = plan_payment(
            config_path=config_path,
            total_sats=total_sats,
            log_path=args.log,
        )
    except (ConfigError, InvalidInputError, SplitConversionError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    recipients = list(plan.recipients)
    if args.max_sats is not None:
        recipients = clip_recipients_at_amount(args.max_sats, recipients)

    if args.json:
        payload = payment_plan_to_dict(plan)
        if args.max_sats is not None:
            clipped = payment_plan_to_dict(replace(plan, recipients=tuple(recipients)))
            payload["recipients"] = clipped["recipients"]
            payload["distributed_sats"] = clipped["distributed_sats"]
            payload["clipped_recipient_count"] = len(plan.recipients) - len(recipients)
        print_structured_stdout(payload)
        return 0

    _print_recipients(recipients)
    distributed = sum(recipient.num_sats for recipient in recipients)
    print(f"planned: total_sats={plan.total_sats} distributed_sats={distributed} recipients={len(recipients)}")
    dropped = len(plan.recipients) - len(recipients)
    if dropped:
        print(f"clipped: {dropped} recipient(s) dropped to stay within max_sats={args.max_sats}")
    return 0


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="v4v-split",
        description="Split a value-for-value payment across the recipients of a splits config.",
    )
    parser.add_argument("amount", type=int, help="Amount to split, in sats (or millisats with --msat).")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to YAML splits config. Default: ${SPLITS_CONFIG_ENV_KEY}, then splits.yml or splits.yaml in working directory.",
    )
    parser.add_argument(
        "--log",
        type=Path,
        default=None,
        help="Append-only JSON event log path. Default: app.log_path from the config.",
    )
    parser.add_argument("--msat", action="store_true", help="Interpret amount as millisats (rounded down to whole sats).")
    parser.add_argument(
        "--max-sats",
        type=int,
        default=None,
        help="Drop trailing recipients once the running total would exceed this many sats.",
    )
    parser.add_argument("--json", action="store_true", help="Print the plan as JSON.")
    return parser


def _print_recipients(recipients: list[PaymentRecipientInfo]) -> None:
    print("Recipients:")
    for idx, item in enumerate(recipients, start=1):
        print(f"{idx}. {item.name} | split={item.split} | sats={item.num_sats}")


if __name__ == "__main__":
    raise SystemExit(main())
