"""
layout/html.py

Serialise a render tree to HTML with inline styles.
"""

from __future__ import annotations

from html import escape

from layout.render_tree import RenderNode, StyleValue

_FONT_WEIGHTS = {"light": "300", "normal": "400", "bold": "700"}

# unitless CSS properties; every other number is rendered in pixels
_UNITLESS = frozenset({"font_weight", "line_height", "opacity", "z_index", "flex"})


def render_html(tree: RenderNode) -> str:
    """Return *tree* as nested ``<div>`` elements."""
    attributes = f' class="pop-kpi-{tree.kind.replace("_", "-")}"'
    if tree.key is not None:
        attributes += f' data-key="{escape(tree.key)}"'
    if tree.style:
        attributes += f' style="{escape(_style_attribute(tree.style))}"'

    inner = escape(tree.text) if tree.text is not None else ""
    inner += "".join(render_html(child) for child in tree.children)
    return f"<div{attributes}>{inner}</div>"


def _style_attribute(style: tuple[tuple[str, StyleValue], ...]) -> str:
    return "; ".join(f"{name.replace('_', '-')}: {_css_value(name, value)}" for name, value in style)


def _css_value(name: str, value: StyleValue) -> str:
    if name == "font_weight":
        return _FONT_WEIGHTS.get(str(value), str(value))
    if name == "font_family":
        return f"{value}, sans-serif"
    if isinstance(value, (int, float)) and name not in _UNITLESS:
        return f"{round(value, 2):g}px"
    return str(value)
