from __future__ import annotations

import argparse
from pathlib import Path

from .config import load_config
from .errors import Mindmap2AnkiError
from .exporter import export_csv
from .exporters.apkg import export_apkg
from .outline import load_outline
from .transform import ConversionResult, convert
from .utils import append_jsonl, default_output_path, import_timestamp


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mindmap2anki",
        description="Turn pencil-flagged nodes of a Freemind XHTML export into Anki flashcards",
    )
    p.add_argument("input", nargs="?", default="index.html", help="Mind map XHTML export")
    p.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Output path (default: input path with .csv / .apkg extension)",
    )
    p.add_argument("--format", default="csv", choices=["csv", "apkg"], help="Export format")
    p.add_argument("--config", default=None, help="Config JSON path")
    p.add_argument("--timestamp", default=None, help="Import batch label (default: current local time)")
    p.add_argument("--deck-name", default=None, help="Deck name for apkg (default: mind map root)")
    p.add_argument("--errors-log", default=None, help="Append skipped markers to this JSONL file")
    return p


def record_skipped(errors_log: str | Path, result: ConversionResult, *, input_path: str) -> None:
    for index, message in zip(result.skipped_markers, result.warnings):
        append_jsonl(
            errors_log,
            {"input": input_path, "marker_index": index, "stage": "convert", "message": message},
        )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = load_config(args.config)
    suffix = ".apkg" if args.format == "apkg" else ".csv"
    out_path = Path(args.output) if args.output else default_output_path(args.input, suffix)
    timestamp = args.timestamp or import_timestamp(cfg.timestamp_format)

    try:
        tree = load_outline(args.input, cfg)
        result = convert(tree, timestamp=timestamp, config=cfg)
    except Mindmap2AnkiError as e:
        print(f"convert_failed: {e}")
        return 1

    for w in result.warnings:
        print(f"warning: {w}")
    if args.errors_log and result.warnings:
        record_skipped(args.errors_log, result, input_path=str(args.input))

    if args.format == "apkg":
        stats = export_apkg(
            result.records,
            out_path,
            deck_name=args.deck_name or result.root_label,
            config=cfg,
        )
    else:
        stats = export_csv(result.records, out_path, config=cfg)

    print(f"cards={stats.cards_exported} skipped_markers={result.stats.markers_skipped} out={out_path}")
    if stats.backup_path is not None:
        print(f"backup={stats.backup_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
