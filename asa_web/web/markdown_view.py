from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple

# Line-oriented converter for the two generated documents.
# Not a markdown engine: one construct per line, one inline pass, no nesting.

HEADER_PREFIXES = (
    ("#### ", "h4"),
    ("### ", "h3"),
    ("## ", "h2"),
    ("# ", "h1"),
)

_ORDERED_RE = re.compile(r"^\d+\. ")
_INLINE_RE = re.compile(r"(\*\*.+?\*\*|`[^`]+`)")


@dataclass(frozen=True)
class Span:
    kind: str   # "text" | "strong" | "code"
    text: str


@dataclass(frozen=True)
class Block:
    kind: str   # h1..h4 | ul_item | ol_item | blockquote | break | paragraph
    spans: Tuple[Span, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.spans)

    @property
    def is_header(self) -> bool:
        return self.kind in ("h1", "h2", "h3", "h4")


def render_inline(text: str) -> Tuple[Span, ...]:
    spans: List[Span] = []
    for part in _INLINE_RE.split(text):
        if not part:
            continue
        if len(part) > 4 and part.startswith("**") and part.endswith("**"):
            spans.append(Span("strong", part[2:-2]))
        elif len(part) > 2 and part.startswith("`") and part.endswith("`"):
            spans.append(Span("code", part[1:-1]))
        else:
            spans.append(Span("text", part))
    return tuple(spans)


def render_line(line: str) -> Block:
    for prefix, kind in HEADER_PREFIXES:
        if line.startswith(prefix):
            # header text stays plain
            return Block(kind, (Span("text", line[len(prefix):]),))

    stripped = line.strip()

    if stripped.startswith("- "):
        return Block("ul_item", render_inline(stripped[2:]))

    m = _ORDERED_RE.match(stripped)
    if m:
        return Block("ol_item", render_inline(stripped[m.end():]))

    if stripped.startswith("> "):
        return Block("blockquote", render_inline(stripped[2:]))

    if not stripped:
        return Block("break")

    return Block("paragraph", render_inline(line))


def render_markdown(text: str) -> List[Block]:
    if not text:
        return []
    return [render_line(line) for line in text.replace("\r\n", "\n").split("\n")]
