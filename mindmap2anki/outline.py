from __future__ import annotations

from pathlib import Path

from bs4 import BeautifulSoup, Tag

from .config import ConverterConfig
from .errors import InputNotFound
from .types import NodeRole, OutlineNode


def classify(tag: Tag, config: ConverterConfig) -> NodeRole:
    if tag.get("alt") == config.flag_alt:
        return NodeRole.FLAG_MARKER
    if config.content_class in (tag.get("class") or []):
        return NodeRole.CONTENT_LABEL
    if tag.name == "li":
        return NodeRole.LIST_ITEM
    if tag.name == "ul":
        return NodeRole.LIST_CONTAINER
    return NodeRole.OTHER


def _make_node(tag: Tag, config: ConverterConfig, parent: OutlineNode) -> OutlineNode:
    role = classify(tag, config)
    return OutlineNode(
        role=role,
        name=tag.name,
        text=tag.get_text() if role is NodeRole.CONTENT_LABEL else None,
        markup=str(tag) if role is NodeRole.LIST_CONTAINER else None,
        parent=parent,
    )


def parse_outline(markup: str | bytes, config: ConverterConfig | None = None) -> OutlineNode:
    """Parse a mind-map XHTML export into a role-tagged outline tree.

    Roles are decided here once; the transform only looks at NodeRole.
    Text nodes are dropped; label text and list markup live on their nodes.
    """
    config = config or ConverterConfig()
    soup = BeautifulSoup(markup, config.html_parser)

    root = OutlineNode(role=NodeRole.OTHER, name=soup.name)
    # Iterative so very deep maps do not hit the recursion limit.
    stack: list[tuple[Tag, OutlineNode]] = [(soup, root)]
    while stack:
        tag, node = stack.pop()
        for child in tag.children:
            if not isinstance(child, Tag):
                continue
            child_node = _make_node(child, config, node)
            node.children.append(child_node)
            stack.append((child, child_node))
    return root


def load_outline(input_path: str | Path, config: ConverterConfig | None = None) -> OutlineNode:
    p = Path(input_path)
    if not p.is_file():
        raise InputNotFound(f"Mind map export '{p}' doesn't exist!")
    # Raw bytes: encoding comes from the export's XML declaration.
    return parse_outline(p.read_bytes(), config)
