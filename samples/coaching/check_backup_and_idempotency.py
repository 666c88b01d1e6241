from __future__ import annotations

import csv
import shutil
import subprocess
import sys
from pathlib import Path


def run_cmd(args: list[str], *, cwd: Path) -> str:
    p = subprocess.run(args, cwd=str(cwd), text=True, capture_output=True)
    out = (p.stdout or "") + (p.stderr or "")
    if p.returncode != 0:
        raise RuntimeError(f"command_failed rc={p.returncode}: {' '.join(args)}\n{out}")
    return p.stdout.strip()


def read_rows(path: Path) -> list[list[str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def main() -> int:
    repo = Path(__file__).resolve().parents[2]
    workspace = repo / "workspace" / "smoke_coaching"

    if workspace.exists():
        shutil.rmtree(workspace)
    workspace.mkdir(parents=True, exist_ok=True)

    src = workspace / "index.html"
    shutil.copyfile(repo / "samples" / "coaching" / "index.html", src)
    out = workspace / "index.csv"
    backup = workspace / "index.csv.old"

    # 1) first run
    run_cmd([sys.executable, "-m", "mindmap2anki", str(src), "--timestamp", "2024-01-01_00-00"], cwd=repo)
    first_rows = read_rows(out)
    if len(first_rows) != 3:
        raise RuntimeError(f"expected 3 cards, got {len(first_rows)}")

    # 2) second run: previous output must survive as .old
    first_bytes = out.read_bytes()
    run_cmd([sys.executable, "-m", "mindmap2anki", str(src), "--timestamp", "2024-01-02_00-00"], cwd=repo)
    if not backup.exists() or backup.read_bytes() != first_bytes:
        raise RuntimeError("backup_missing_or_changed")

    # 3) same input, different batch: only the import tag may change
    second_rows = read_rows(out)
    for a, b in zip(first_rows, second_rows):
        if a[:2] != b[:2]:
            raise RuntimeError(f"question/answer changed between runs: {a[:2]} vs {b[:2]}")
        if a[2].split()[1] == b[2].split()[1]:
            raise RuntimeError("import tag did not change between runs")

    print("OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
