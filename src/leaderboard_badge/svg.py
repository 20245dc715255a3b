"""Minimal SVG scene graph and serializer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

from .sanitize import escape_markup

SVG_NS = "http://www.w3.org/2000/svg"

AttrValue = Union[str, int, float]


def fmt_number(value: float) -> str:
    """Format a coordinate without float noise (``12.0`` -> ``12``)."""
    if isinstance(value, int):
        return str(value)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


@dataclass
class SvgNode:
    """One element of the document.

    ``text`` is markup: callers escape it (see :mod:`leaderboard_badge.sanitize`)
    before building the node. Attribute values are escaped on serialization.
    """

    tag: str
    attrs: dict[str, AttrValue] = field(default_factory=dict)
    children: list[SvgNode] = field(default_factory=list)
    text: str | None = None

    def add(self, child: SvgNode) -> SvgNode:
        self.children.append(child)
        return child

    def walk(self) -> Iterator[SvgNode]:
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, **attrs: AttrValue) -> SvgNode | None:
        """First node (depth-first) whose attributes include ``attrs``."""
        for node in self.walk():
            if all(node.attrs.get(k) == v for k, v in attrs.items()):
                return node
        return None

    def find_all(self, tag: str) -> list[SvgNode]:
        return [node for node in self.walk() if node.tag == tag]

    def to_xml(self) -> str:
        parts: list[str] = []
        self._write(parts)
        return "".join(parts)

    def _write(self, parts: list[str]) -> None:
        parts.append(f"<{self.tag}")
        for key, value in self.attrs.items():
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                rendered = fmt_number(value)
            else:
                rendered = escape_markup(str(value))
            parts.append(f' {key}="{rendered}"')
        if not self.children and self.text is None:
            parts.append("/>")
            return
        parts.append(">")
        if self.text is not None:
            parts.append(self.text)
        for child in self.children:
            child._write(parts)
        parts.append(f"</{self.tag}>")


def element(tag: str, text: str | None = None, **attrs: AttrValue) -> SvgNode:
    """Build a node; ``font_size`` style keyword names become ``font-size``."""
    return SvgNode(
        tag=tag,
        attrs={key.rstrip("_").replace("_", "-"): value for key, value in attrs.items()},
        text=text,
    )
