"""Mind-map outline -> flashcard records.

A flagged node (pencil icon) becomes the question. Its nested list becomes
the answer, and the list items between the document root and the question
become the breadcrumb title, e.g. for

    Coaching Mindmap > Coaching Questions > Scaling Questions > 2-dimensional scaling (flagged)

the front side reads "Coaching Questions > Scaling Questions" followed by the
emphasized question.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, field
from typing import Iterator

from .config import ConverterConfig
from .errors import StructuralError
from .types import FlashcardRecord, NodeRole, OutlineNode

_TAG_WHITESPACE = re.compile(r"\s+")


@dataclass
class ConversionStats:
    markers_seen: int = 0
    cards_built: int = 0
    markers_skipped: int = 0


@dataclass
class ConversionResult:
    root_label: str
    records: list[FlashcardRecord] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    skipped_markers: list[int] = field(default_factory=list)  # 1-based, document order
    stats: ConversionStats = field(default_factory=ConversionStats)


def extract_root_label(tree: OutlineNode) -> str:
    # First label in document order wins, even if the export has several.
    label = tree.first_descendant(NodeRole.CONTENT_LABEL)
    if label is None:
        raise StructuralError("no content label found; cannot determine the mind map root")
    return (label.text or "").strip()


def find_flagged_nodes(tree: OutlineNode) -> Iterator[OutlineNode]:
    return (node for node in tree.iter_descendants() if node.role is NodeRole.FLAG_MARKER)


def resolve_question(marker: OutlineNode) -> OutlineNode:
    container = marker.parent
    question = container.first_descendant(NodeRole.CONTENT_LABEL) if container is not None else None
    if question is None:
        raise StructuralError("flag marker has no content label next to it")
    return question


def _item_label(item: OutlineNode) -> str:
    label = item.first_descendant(NodeRole.CONTENT_LABEL)
    if label is None:
        raise StructuralError("ancestor list item has no content label")
    return (label.text or "").strip()


def build_breadcrumb(question: OutlineNode) -> tuple[str, ...]:
    """Titles of the list items between the document root and the question.

    Returns root-to-leaf order. The question's own item and the document
    root's item are never included.
    """
    items = [n for n in question.iter_ancestors() if n.role is NodeRole.LIST_ITEM]
    inner = items[1:-1]
    return tuple(reversed([_item_label(li) for li in inner]))


def resolve_answer(question: OutlineNode) -> str:
    container = question.parent
    if container is None:
        return ""
    answer = container.first_child(NodeRole.LIST_CONTAINER)
    if answer is None:
        return ""
    return answer.markup or ""


def assemble_record(
    question: OutlineNode,
    root_label: str,
    timestamp: str,
    *,
    config: ConverterConfig | None = None,
) -> FlashcardRecord:
    config = config or ConverterConfig()
    breadcrumb = build_breadcrumb(question)

    tags = [root_label, f"{config.batch_tag_prefix}{timestamp}"]
    if breadcrumb:
        tags.append(breadcrumb[0])

    return FlashcardRecord(
        question_text=(question.text or "").strip(),
        ancestor_breadcrumb=breadcrumb,
        answer_markup=resolve_answer(question),
        tags=tuple(tags),
    )


def render_question_field(record: FlashcardRecord, *, separator: str = " > ") -> str:
    title = separator.join(html.escape(s, quote=False) for s in record.ancestor_breadcrumb)
    question = html.escape(record.question_text, quote=False)
    return f"{title}<br><br>\n\n<strong>{question}</strong>"


def tag_tokens(record: FlashcardRecord) -> list[str]:
    return [_TAG_WHITESPACE.sub("-", t.strip()) for t in record.tags if t.strip()]


def render_tags(record: FlashcardRecord) -> str:
    return " ".join(tag_tokens(record))


def convert(
    tree: OutlineNode,
    *,
    timestamp: str,
    config: ConverterConfig | None = None,
) -> ConversionResult:
    """Run the whole transform over a parsed outline.

    A missing root label raises StructuralError. A marker that cannot be
    resolved is skipped and reported in ``warnings``.
    """
    config = config or ConverterConfig()
    result = ConversionResult(root_label=extract_root_label(tree))

    for index, marker in enumerate(find_flagged_nodes(tree), start=1):
        result.stats.markers_seen += 1
        try:
            question = resolve_question(marker)
            record = assemble_record(question, result.root_label, timestamp, config=config)
        except StructuralError as e:
            result.stats.markers_skipped += 1
            result.skipped_markers.append(index)
            result.warnings.append(f"skipped_marker index={index} error={e}")
            continue
        result.records.append(record)
        result.stats.cards_built += 1

    return result
