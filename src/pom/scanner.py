"""Offset-preserving scan of POM text.

ElementTree discards the source layout, so edits are located with a small
tokenizer that records the character span of every element. Only element
structure is modelled; comments, processing instructions, CDATA and the
doctype are skipped over but left in place.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional
from xml.sax.saxutils import unescape

from errors import DocumentRewriteError

_TOKEN = re.compile(
    r"<!--.*?-->"
    r"|<!\[CDATA\[.*?\]\]>"
    r"|<\?.*?\?>"
    r"|<!DOCTYPE(?:[^\[>]|\[.*?\])*>"
    r"|<(?P<close>/?)(?P<name>[A-Za-z_][\w.:-]*)"
    r"(?P<attrs>(?:\s+[^\s=/>]+\s*=\s*(?:\"[^\"]*\"|'[^']*'))*)\s*(?P<empty>/?)>",
    re.S,
)
_COMMENT = re.compile(r"<!--.*?-->", re.S)
_CDATA = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.S)


@dataclass(eq=False)
class Element:
    """An element with the spans of its tags.

    ``open_end`` is the index just past the start tag and ``close_start`` the
    index of the end tag; for empty elements both equal ``end``.
    """
    name: str
    start: int
    open_end: int
    close_start: int = -1
    end: int = -1
    parent: Optional["Element"] = None
    children: List["Element"] = field(default_factory=list)

    @property
    def local_name(self) -> str:
        return self.name.rsplit(":", 1)[-1]

    @property
    def path(self) -> str:
        parts = []
        node: Optional[Element] = self
        while node is not None:
            parts.append(node.local_name)
            node = node.parent
        return "/" + "/".join(reversed(parts))

    def child(self, local_name: str) -> Optional["Element"]:
        for c in self.children:
            if c.local_name == local_name:
                return c
        return None

    def iter(self) -> Iterator["Element"]:
        yield self
        for c in self.children:
            yield from c.iter()


def element_content(text: str, element: Element) -> str:
    """Raw markup between the start and end tag."""
    return text[element.open_end:element.close_start]


def element_text(text: str, element: Element) -> str:
    """Character data of a leaf element, stripped and unescaped."""
    content = _COMMENT.sub("", element_content(text, element))
    content = _CDATA.sub(lambda m: m.group(1), content)
    return unescape(content).strip()


def scan(text: str) -> Element:
    """Build the element tree of ``text``.

    Raises:
        DocumentRewriteError: stray markup, mismatched or unclosed tags, or
            no root element.
    """
    root: Optional[Element] = None
    stack: List[Element] = []
    pos = 0

    for m in _TOKEN.finditer(text):
        if "<" in text[pos:m.start()]:
            offset = text.index("<", pos)
            raise DocumentRewriteError(f"Unparseable markup at offset {offset}")
        pos = m.end()
        name = m.group("name")
        if name is None:
            continue

        if m.group("close"):
            if not stack or stack[-1].name != name:
                expected = stack[-1].name if stack else None
                raise DocumentRewriteError(
                    f"Unexpected </{name}> at offset {m.start()} (expected </{expected}>)"
                )
            element = stack.pop()
            element.close_start = m.start()
            element.end = m.end()
            continue

        parent = stack[-1] if stack else None
        if parent is None and root is not None:
            raise DocumentRewriteError(f"Second root element <{name}> at offset {m.start()}")
        element = Element(name=name, start=m.start(), open_end=m.end(), parent=parent)
        if parent is not None:
            parent.children.append(element)
        else:
            root = element
        if m.group("empty"):
            element.close_start = m.end()
            element.end = m.end()
        else:
            stack.append(element)

    if "<" in text[pos:]:
        raise DocumentRewriteError(f"Unparseable markup at offset {text.index('<', pos)}")
    if stack:
        raise DocumentRewriteError(f"Unclosed element <{stack[-1].name}>")
    if root is None:
        raise DocumentRewriteError("Document has no root element")
    return root
