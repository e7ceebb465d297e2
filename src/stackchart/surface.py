"""Drawing surface abstraction and its SVG implementation.

Charts draw into anything implementing :class:`DrawingSurface`: a node that
can find-or-create children keyed by class name, set attributes and nest
further nodes. :class:`SvgElement` is the in-memory implementation used by
default; it serializes with :mod:`xml.etree.ElementTree`.

Keying children by class name is what makes rendering idempotent: drawing
the same chart twice into the same surface updates the existing nodes instead
of appending duplicates.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Protocol, runtime_checkable
from xml.etree import ElementTree as ET

from stackchart.utils import format_number

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

_MISSING = object()


# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class DrawingSurface(Protocol):
    """Minimal node interface the chart and axis renderers rely on."""

    def select_or_create(self, tag: str, class_name: str) -> DrawingSurface:
        """Return the child with ``class_name``, creating it if needed."""
        ...

    def join(self, tag: str, class_name: str, count: int) -> list[DrawingSurface]:
        """Return exactly ``count`` children with ``class_name``."""
        ...

    def attr(self, name: str, value: Any = ...) -> Any:
        """Get an attribute, or set it and return the node."""
        ...

    def text(self, value: Any = ...) -> Any:
        """Get the text content, or set it and return the node."""
        ...

    def select_all(
        self, class_name: str | None = None, tag: str | None = None
    ) -> list[DrawingSurface]:
        """Return all matching descendants."""
        ...


# =============================================================================
# SVG implementation
# =============================================================================


class SvgElement:
    """A mutable SVG node."""

    def __init__(
        self,
        tag: str,
        attrs: dict[str, Any] | None = None,
        parent: SvgElement | None = None,
    ) -> None:
        self.tag = tag
        self.attrs: dict[str, Any] = dict(attrs or {})
        self.children: list[SvgElement] = []
        self.parent = parent
        self._text: str | None = None

    # -- attributes ---------------------------------------------------------

    def attr(self, name: str, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self.attrs.get(name)
        if value is None:
            self.attrs.pop(name, None)
        else:
            self.attrs[name] = value
        return self

    def text(self, value: Any = _MISSING) -> Any:
        if value is _MISSING:
            return self._text
        self._text = None if value is None else str(value)
        return self

    @property
    def classes(self) -> list[str]:
        return str(self.attrs.get("class", "")).split()

    def has_class(self, class_name: str) -> bool:
        return class_name in self.classes

    # -- structure ----------------------------------------------------------

    def append(self, tag: str, class_name: str | None = None) -> SvgElement:
        child = SvgElement(tag, parent=self)
        if class_name:
            child.attr("class", class_name)
        self.children.append(child)
        return child

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def _matching_children(self, tag: str, class_name: str) -> list[SvgElement]:
        return [c for c in self.children if c.tag == tag and c.has_class(class_name)]

    def select(self, class_name: str) -> SvgElement | None:
        """First direct child carrying ``class_name``."""
        for child in self.children:
            if child.has_class(class_name):
                return child
        return None

    def select_or_create(self, tag: str, class_name: str) -> SvgElement:
        return self.join(tag, class_name, 1)[0]

    def join(self, tag: str, class_name: str, count: int) -> list[SvgElement]:
        existing = self._matching_children(tag, class_name)
        for stale in existing[count:]:
            stale.remove()
        nodes = existing[:count]
        while len(nodes) < count:
            nodes.append(self.append(tag, class_name))
        return nodes

    def iter(self) -> Iterator[SvgElement]:
        """Depth-first iteration over descendants, excluding self."""
        for child in self.children:
            yield child
            yield from child.iter()

    def select_all(
        self, class_name: str | None = None, tag: str | None = None
    ) -> list[SvgElement]:
        return [
            node
            for node in self.iter()
            if (class_name is None or node.has_class(class_name))
            and (tag is None or node.tag == tag)
        ]

    # -- serialization ------------------------------------------------------

    def to_etree(self) -> ET.Element:
        element = ET.Element(
            self.tag, {k: format_number(v) for k, v in self.attrs.items()}
        )
        if self._text is not None:
            element.text = self._text
        for child in self.children:
            element.append(child.to_etree())
        return element

    def to_string(self) -> str:
        return ET.tostring(self.to_etree(), encoding="unicode")

    def __repr__(self) -> str:
        return f"SvgElement({self.tag!r}, class={self.attrs.get('class')!r}, children={len(self.children)})"


class SvgCanvas(SvgElement):
    """Root ``<svg>`` element."""

    def __init__(self, width: int | float = 900, height: int | float = 800) -> None:
        super().__init__("svg", {"xmlns": SVG_NAMESPACE, "width": width, "height": height})

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_string(), encoding="utf-8")
        logger.info("Saved SVG to %s", path)
        return path
