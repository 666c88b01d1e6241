from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..config import ConverterConfig
from ..exporter import backup_existing, record_to_row
from ..transform import tag_tokens
from ..types import FlashcardRecord


@dataclass
class ApkgExportStats:
    cards_exported: int = 0
    deck_name: str | None = None
    backup_path: Path | None = None


def _stable_int_id(s: str) -> int:
    # genanki ids must be int; keep stable across runs.
    digest = hashlib.sha1(s.encode("utf-8")).digest()
    n = int.from_bytes(digest[:8], "big", signed=False)
    return n % (2**31 - 1)


def export_apkg(
    records: Iterable[FlashcardRecord],
    out_path: str | Path,
    *,
    deck_name: str,
    config: ConverterConfig | None = None,
) -> ApkgExportStats:
    """Export records as an Anki .apkg deck.

    Model:
    - Fields: Question, Answer (same HTML as the CSV columns)
    - Tags: hyphenated tag tokens, one Anki tag each

    Same backup rule as CSV: an existing file is moved to <out_path>.old.
    """

    try:
        import genanki  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "genanki is required for apkg export. Install with: pip install genanki"
        ) from e

    out_path = Path(out_path)
    stats = ApkgExportStats(deck_name=deck_name)

    model = genanki.Model(
        _stable_int_id(f"mindmap2anki:model:{deck_name}"),
        "mindmap2anki_basic_html",
        fields=[
            {"name": "Question"},
            {"name": "Answer"},
        ],
        templates=[
            {
                "name": "Card 1",
                "qfmt": "{{Question}}",
                "afmt": "{{FrontSide}}<hr id=answer>{{Answer}}",
            }
        ],
    )

    deck = genanki.Deck(_stable_int_id(f"mindmap2anki:deck:{deck_name}"), deck_name)

    for r in records:
        question, answer, _ = record_to_row(r, config)
        note = genanki.Note(model=model, fields=[question, answer], tags=tag_tokens(r))
        deck.add_note(note)
        stats.cards_exported += 1

    stats.backup_path = backup_existing(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    genanki.Package(deck).write_to_file(str(out_path))

    return stats
