from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console

_STDOUT_CONSOLE = Console()


def print_structured_stdout(value: dict[str, Any] | list[Any] | str) -> None:
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            print(value)
            return
    else:
        parsed = value

    _STDOUT_CONSOLE.print_json(json=json.dumps(parsed, ensure_ascii=True, sort_keys=True))


def append_log_event(path: Path | None, event: dict[str, Any], echo_stdout: bool = False) -> None:
    line = json.dumps(event, ensure_ascii=True, separators=(",", ":"), sort_keys=True)

    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"{line}\n")

    if path is None or echo_stdout:
        print_structured_stdout(event)
