"""
Document navigation for the embedded Next.js page props.

The page props are a generic JSON tree. The schedule tables sit deep
inside it::

    props.pageProps.blocks[*]               <- scan for the block with "tabs"
        .tabs.tabs[*]                       <- one entry per schedule tab
            .blocks[*]                      <- content blocks of the tab
                .richTextEditor.articleRawHtml   <- HTML table fragment

Only the key names are relied on. The block holding ``tabs`` is found by
a linear scan for the key, not by index, because the page editor can
reorder or insert blocks between revisions.

Every access goes through a typed accessor (``get_mapping``,
``get_sequence``, ``get_string``) that checks the node kind and raises
``MalformedDocument`` with the dotted path of the offending node. There is
no partial-result mode.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pathtopro_schedule.config import NavigationConfig
from pathtopro_schedule.exceptions import MalformedDocument

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
    """Shape of a JSON node."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    STRING = "string"
    OTHER = "other"


def node_kind(node: Any) -> NodeKind:
    """Classify a decoded JSON value."""
    if isinstance(node, dict):
        return NodeKind.MAPPING
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    if isinstance(node, str):
        return NodeKind.STRING
    return NodeKind.OTHER


def _join(where: str, key: str) -> str:
    return f"{where}.{key}" if where else key


def _descend(node: Any, keys: list[str], where: str) -> tuple[Any, str]:
    """Follow *keys* through nested mappings, returning (value, path)."""
    for key in keys:
        if node_kind(node) is not NodeKind.MAPPING:
            raise MalformedDocument(
                f"Expected mapping at '{where or '<root>'}', "
                f"found {node_kind(node).value}"
            )
        if key not in node:
            raise MalformedDocument(f"Missing key '{_join(where, key)}'")
        node = node[key]
        where = _join(where, key)
    return node, where


def _expect(node: Any, kind: NodeKind, where: str) -> Any:
    actual = node_kind(node)
    if actual is not kind:
        raise MalformedDocument(
            f"Expected {kind.value} at '{where}', found {actual.value}"
        )
    return node


def get_mapping(node: Any, *keys: str, where: str = "") -> dict[str, Any]:
    """Follow *keys* and return the mapping found there."""
    value, path = _descend(node, list(keys), where)
    return _expect(value, NodeKind.MAPPING, path or "<root>")


def get_sequence(node: Any, *keys: str, where: str = "") -> list[Any]:
    """Follow *keys* and return the sequence found there."""
    value, path = _descend(node, list(keys), where)
    return _expect(value, NodeKind.SEQUENCE, path or "<root>")


def get_string(node: Any, *keys: str, where: str = "") -> str:
    """Follow *keys* and return the string found there."""
    value, path = _descend(node, list(keys), where)
    return _expect(value, NodeKind.STRING, path or "<root>")


def find_marked_block(
    blocks: list[Any], marker_key: str, where: str = ""
) -> tuple[dict[str, Any], str]:
    """Return the first mapping in *blocks* that contains *marker_key*.

    Non-mapping elements are passed over.

    Returns:
        Tuple of (block, dotted path of the block).

    Raises:
        MalformedDocument: If no element carries the marker key.
    """
    for index, block in enumerate(blocks):
        if node_kind(block) is NodeKind.MAPPING and marker_key in block:
            return block, f"{where}[{index}]"
    raise MalformedDocument(
        f"No element of '{where}' contains key '{marker_key}' "
        f"({len(blocks)} elements scanned)"
    )


def extract_fragments(
    document: dict[str, Any],
    config: NavigationConfig | None = None,
) -> list[str]:
    """Return the schedule table fragments embedded in *document*.

    Args:
        document: The decoded page props (top-level JSON object).
        config: Key names to navigate by; defaults to the Path to Pro layout.

    Returns:
        HTML fragments in document order (tab order, then block order).

    Raises:
        MalformedDocument: If any expected key is missing or has the wrong
            shape.
    """
    if config is None:
        config = NavigationConfig()

    root = get_mapping(document, *config.root_path)
    root_where = ".".join(config.root_path)
    blocks_where = _join(root_where, config.blocks_key)
    blocks = get_sequence(root, config.blocks_key, where=root_where)

    marked, marked_where = find_marked_block(blocks, config.marker_key, blocks_where)
    tabs_where = _join(marked_where, config.marker_key)
    tabs = get_sequence(
        get_mapping(marked, config.marker_key, where=marked_where),
        config.tabs_key,
        where=tabs_where,
    )
    tabs_where = _join(tabs_where, config.tabs_key)

    fragments: list[str] = []
    for tab_index, tab in enumerate(tabs):
        tab_where = f"{tabs_where}[{tab_index}]"
        tab = _expect(tab, NodeKind.MAPPING, tab_where)
        content = get_sequence(tab, config.content_key, where=tab_where)
        content_where = _join(tab_where, config.content_key)
        for block_index, block in enumerate(content):
            block_where = f"{content_where}[{block_index}]"
            fragments.append(get_string(block, *config.text_path, where=block_where))

    logger.info(
        "Found %d table fragment(s) across %d tab(s)", len(fragments), len(tabs)
    )
    return fragments
