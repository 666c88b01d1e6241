from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class NodeRole(Enum):
    CONTENT_LABEL = "content_label"
    LIST_ITEM = "list_item"
    LIST_CONTAINER = "list_container"
    FLAG_MARKER = "flag_marker"
    OTHER = "other"


@dataclass(eq=False)
class OutlineNode:
    role: NodeRole
    name: str  # markup tag name, e.g. li / ul / span
    text: str | None = None  # content labels only
    markup: str | None = None  # list containers only
    children: list[OutlineNode] = field(default_factory=list, repr=False)
    parent: OutlineNode | None = field(default=None, repr=False)

    def iter_descendants(self) -> Iterator[OutlineNode]:
        """Yield all descendants in document order (self excluded)."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def iter_ancestors(self) -> Iterator[OutlineNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def first_descendant(self, role: NodeRole) -> OutlineNode | None:
        for node in self.iter_descendants():
            if node.role is role:
                return node
        return None

    def first_child(self, role: NodeRole) -> OutlineNode | None:
        for node in self.children:
            if node.role is role:
                return node
        return None


@dataclass(frozen=True)
class FlashcardRecord:
    question_text: str
    ancestor_breadcrumb: tuple[str, ...]  # root-to-leaf
    answer_markup: str
    tags: tuple[str, ...]  # un-hyphenated; see transform.render_tags
