from __future__ import annotations

import csv
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .config import ConverterConfig
from .transform import render_question_field, render_tags
from .types import FlashcardRecord


@dataclass
class ExportStats:
    cards_exported: int = 0
    backup_path: Path | None = None


def record_to_row(record: FlashcardRecord, config: ConverterConfig | None = None) -> list[str]:
    config = config or ConverterConfig()
    return [
        render_question_field(record, separator=config.breadcrumb_separator),
        record.answer_markup,
        render_tags(record),
    ]


def backup_existing(path: str | Path) -> Path | None:
    """Move an existing file to ``<path>.old`` (one level, replaces an older backup)."""
    p = Path(path)
    if not p.exists():
        return None
    backup = p.with_name(p.name + ".old")
    os.replace(p, backup)
    return backup


def export_csv(
    records: Iterable[FlashcardRecord],
    out_path: str | Path,
    *,
    config: ConverterConfig | None = None,
) -> ExportStats:
    """Write Anki import rows: question, answer, tags.

    Rules:
    - No header row; import in Anki with "Fields separated by: Comma"
    - An existing file at out_path is renamed to <out_path>.old first
    - Zero records still writes an (empty) file
    """
    out_path = Path(out_path)
    stats = ExportStats()

    stats.backup_path = backup_existing(out_path)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        for r in records:
            writer.writerow(record_to_row(r, config))
            stats.cards_exported += 1

    return stats
