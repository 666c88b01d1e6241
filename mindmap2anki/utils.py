from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any


def import_timestamp(fmt: str = "%Y-%m-%d_%H-%M", *, now: datetime | None = None) -> str:
    """Batch label for one run, in local time."""
    return (now or datetime.now()).strftime(fmt)


def default_output_path(input_path: str | Path, suffix: str = ".csv") -> Path:
    """Replace the input's extension, or append one when it has none.

    index.html -> index.csv, notes -> notes.csv
    """
    p = Path(input_path)
    if p.suffix and p.suffix != suffix:
        return p.with_suffix(suffix)
    return p.with_name(p.name + suffix)


def append_jsonl(path: str | Path, obj: dict[str, Any]) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(obj, ensure_ascii=False) + "\n")


def load_json(path: str | Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
