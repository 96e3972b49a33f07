"""
layout/render_tree.py

Immutable render tree emitted by the layout composer.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

StyleValue = str | int | float


@dataclass(frozen=True)
class RenderNode:
    """
    One box of the rendered chart.

    ``style`` holds CSS-like properties as ``(name, value)`` pairs with
    snake_case names; pixel sizes are plain numbers. Nodes are hashable
    and compare by value, so two renders of the same inputs are equal.
    """

    kind: str
    text: str | None = None
    key: str | None = None
    style: tuple[tuple[str, StyleValue], ...] = ()
    children: tuple["RenderNode", ...] = ()

    @property
    def style_dict(self) -> dict[str, StyleValue]:
        return dict(self.style)

    def iter_nodes(self) -> Iterator["RenderNode"]:
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def find(self, kind: str) -> list["RenderNode"]:
        return [node for node in self.iter_nodes() if node.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind, "style": self.style_dict}
        if self.key is not None:
            payload["key"] = self.key
        if self.text is not None:
            payload["text"] = self.text
        if self.children:
            payload["children"] = [child.to_dict() for child in self.children]
        return payload


def node(
    kind: str,
    *children: RenderNode,
    text: str | None = None,
    key: str | None = None,
    **style: StyleValue,
) -> RenderNode:
    """Build a :class:`RenderNode` with keyword styles."""
    return RenderNode(
        kind=kind,
        text=text,
        key=key,
        style=tuple(style.items()),
        children=tuple(children),
    )
