from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_MINDMAP = Path(__file__).resolve().parents[1] / "samples" / "coaching" / "index.html"

# Root -> Coaching Questions -> Scaling Questions -> 2-dimensional scaling (flagged)
SCENARIO_HTML = (
    "<ul><li><span class=\"nodecontent\">Coaching Mindmap</span>"
    "<ul><li><span class=\"nodecontent\">Coaching Questions</span>"
    "<ul><li><span class=\"nodecontent\">Scaling Questions</span>"
    "<ul><li><img src=\"./icons/pencil.png\" alt=\"pencil\"/>"
    "<span class=\"nodecontent\">2-dimensional scaling</span>"
    "<ul><li><span class=\"nodecontent\">Explanation text</span></li></ul>"
    "</li></ul>"
    "</li></ul>"
    "</li></ul>"
    "</li></ul>"
)


@pytest.fixture
def scenario_html() -> str:
    return SCENARIO_HTML


@pytest.fixture
def sample_path() -> Path:
    return SAMPLE_MINDMAP


@pytest.fixture
def sample_copy(tmp_path: Path) -> Path:
    """Sample mind map copied into a scratch dir as index.html."""
    dst = tmp_path / "index.html"
    dst.write_bytes(SAMPLE_MINDMAP.read_bytes())
    return dst
