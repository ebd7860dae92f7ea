from __future__ import annotations

from datetime import datetime, timezone

MILLISATS_PER_SAT = 1000


def sats_to_millisats(num_sats: int) -> int:
    if num_sats < 0:
        raise ValueError(f"Sat amount must be non-negative, got {num_sats}.")
    return num_sats * MILLISATS_PER_SAT


def millisats_to_sats(num_millisats: int) -> int:
    if num_millisats < 0:
        raise ValueError(f"Millisat amount must be non-negative, got {num_millisats}.")
    return num_millisats // MILLISATS_PER_SAT


def now_local_iso() -> str:
    return datetime.now(timezone.utc).astimezone().isoformat(timespec="seconds")


def clean_text(value: str) -> str:
    return " ".join(value.split())
