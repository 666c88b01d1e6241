from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path

import pytest

from mindmap2anki.cli import main
from mindmap2anki.config import ConverterConfig, load_config
from mindmap2anki.utils import default_output_path, import_timestamp

TS = "2024-05-01_09-30"
REPO = Path(__file__).resolve().parents[1]


def _read_rows(path: Path) -> list[list[str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestDefaultOutputPath:
    def test_replaces_html_extension(self):
        assert default_output_path("maps/index.html") == Path("maps/index.csv")

    def test_replaces_htm_extension(self):
        assert default_output_path("index.htm") == Path("index.csv")

    def test_appends_when_no_extension(self):
        assert default_output_path("export") == Path("export.csv")

    def test_apkg_suffix(self):
        assert default_output_path("index.html", ".apkg") == Path("index.apkg")


class TestImportTimestamp:
    def test_default_format(self):
        assert import_timestamp(now=datetime(2024, 5, 1, 9, 30, 59)) == TS

    def test_custom_format(self):
        assert import_timestamp("%Y%m%d", now=datetime(2024, 5, 1)) == "20240501"


class TestConfig:
    def test_default_without_path(self):
        assert load_config(None) == ConverterConfig()

    def test_shipped_default_matches_dataclass(self):
        assert load_config(REPO / "config" / "default.json") == ConverterConfig()

    def test_partial_config_keeps_defaults(self, tmp_path: Path):
        p = tmp_path / "cfg.json"
        p.write_text(json.dumps({"flag_alt": "button_ok"}), encoding="utf-8")
        cfg = load_config(p)
        assert cfg.flag_alt == "button_ok"
        assert cfg.content_class == "nodecontent"

    def test_unknown_key_rejected(self, tmp_path: Path):
        p = tmp_path / "cfg.json"
        p.write_text(json.dumps({"flag": "pencil"}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(p)


class TestMain:
    def test_converts_to_default_csv(self, sample_copy: Path, capsys):
        rc = main([str(sample_copy), "--timestamp", TS])

        out = sample_copy.with_suffix(".csv")
        rows = _read_rows(out)
        assert rc == 0
        assert len(rows) == 3
        assert rows[0][2] == f"Coaching-Mindmap import-{TS} Coaching-Questions"
        assert f"cards=3 skipped_markers=0 out={out}" in capsys.readouterr().out

    def test_explicit_output_path(self, sample_copy: Path, tmp_path: Path):
        out = tmp_path / "out" / "deck.csv"
        assert main([str(sample_copy), str(out), "--timestamp", TS]) == 0
        assert len(_read_rows(out)) == 3

    def test_second_run_backs_up_first(self, sample_copy: Path, capsys):
        out = sample_copy.with_suffix(".csv")
        main([str(sample_copy), "--timestamp", "2024-01-01_00-00"])
        first = out.read_text(encoding="utf-8")

        main([str(sample_copy), "--timestamp", "2024-01-02_00-00"])

        backup = out.with_name(out.name + ".old")
        assert backup.read_text(encoding="utf-8") == first
        assert f"backup={backup}" in capsys.readouterr().out

        old_rows = _read_rows(backup)
        new_rows = _read_rows(out)
        for a, b in zip(old_rows, new_rows):
            assert a[:2] == b[:2]
            assert a[2] != b[2]

    def test_missing_input_fails(self, tmp_path: Path, capsys):
        rc = main([str(tmp_path / "missing.html")])
        assert rc == 1
        assert "convert_failed" in capsys.readouterr().out
        assert not (tmp_path / "missing.csv").exists()

    def test_missing_root_label_fails(self, tmp_path: Path, capsys):
        src = tmp_path / "index.html"
        src.write_text("<ul><li>nothing labelled</li></ul>", encoding="utf-8")
        rc = main([str(src)])
        assert rc == 1
        assert "convert_failed" in capsys.readouterr().out

    def test_skipped_marker_warns_and_logs(self, tmp_path: Path, capsys):
        src = tmp_path / "index.html"
        src.write_text(
            '<ul><li><span class="nodecontent">Root</span><ul>'
            '<li><span class="icons"><img alt="pencil"/></span>orphan</li>'
            '<li><img alt="pencil"/><span class="nodecontent">Valid</span></li>'
            "</ul></li></ul>",
            encoding="utf-8",
        )
        log = tmp_path / "errors.jsonl"

        rc = main([str(src), "--timestamp", TS, "--errors-log", str(log)])

        printed = capsys.readouterr().out
        assert rc == 0
        assert "warning: skipped_marker index=1" in printed
        assert "cards=1 skipped_markers=1" in printed
        assert len(_read_rows(tmp_path / "index.csv")) == 1

        entries = [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines()]
        assert len(entries) == 1
        assert entries[0]["marker_index"] == 1
        assert entries[0]["stage"] == "convert"

    def test_apkg_format(self, sample_copy: Path, capsys):
        pytest.importorskip("genanki")
        rc = main([str(sample_copy), "--format", "apkg", "--timestamp", TS])
        assert rc == 0
        assert sample_copy.with_suffix(".apkg").exists()
        assert "cards=3" in capsys.readouterr().out
