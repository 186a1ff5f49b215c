# risk_scanner/explain.py
"""
Turn the service's markdown-flavored explanation into plain blocks of
styled spans, so the report stays independent of any terminal library.
"""
from dataclasses import dataclass
from typing import List, Literal, Tuple

from markdown_it import MarkdownIt

BlockKind = Literal["paragraph", "heading", "item", "code"]

_md = MarkdownIt("commonmark")


@dataclass(frozen=True)
class Span:
    text: str
    strong: bool = False
    emphasis: bool = False
    code: bool = False


@dataclass(frozen=True)
class Block:
    kind: BlockKind
    spans: Tuple[Span, ...]
    # list nesting depth, 0 outside lists
    depth: int = 0
    marker: str = ""

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.spans)


def _inline_spans(children) -> Tuple[Span, ...]:
    spans: List[Span] = []
    strong = 0
    em = 0

    for child in children or []:
        t = child.type
        if t == "strong_open":
            strong += 1
        elif t == "strong_close":
            strong -= 1
        elif t == "em_open":
            em += 1
        elif t == "em_close":
            em -= 1
        elif t == "code_inline":
            spans.append(Span(child.content, code=True))
        elif t == "softbreak":
            spans.append(Span(" "))
        elif t == "hardbreak":
            spans.append(Span("\n"))
        elif t in ("text", "html_inline", "image"):
            if child.content:
                spans.append(Span(child.content, strong=strong > 0, emphasis=em > 0))
        # link_open / link_close carry no text of their own

    return tuple(spans)


def parse_explanation(text: str) -> List[Block]:
    blocks: List[Block] = []
    # one entry per open list: [ordered?, next number]
    lists: List[list] = []
    in_heading = False
    item_started = False

    for tok in _md.parse(text or ""):
        t = tok.type

        if t == "bullet_list_open":
            lists.append([False, 0])
        elif t == "ordered_list_open":
            start = tok.attrGet("start")
            lists.append([True, int(start) if start else 1])
        elif t in ("bullet_list_close", "ordered_list_close"):
            lists.pop()
        elif t == "list_item_open":
            item_started = True
        elif t == "heading_open":
            in_heading = True
        elif t == "heading_close":
            in_heading = False
        elif t in ("fence", "code_block"):
            blocks.append(Block("code", (Span(tok.content.rstrip("\n"), code=True),), len(lists)))
        elif t == "inline":
            spans = _inline_spans(tok.children)
            if in_heading:
                blocks.append(Block("heading", spans))
            elif lists and item_started:
                ordered, n = lists[-1]
                marker = f"{n}." if ordered else "-"
                if ordered:
                    lists[-1][1] = n + 1
                blocks.append(Block("item", spans, len(lists), marker))
                item_started = False
            else:
                # continuation paragraphs inside a list item keep its depth
                blocks.append(Block("paragraph", spans, len(lists)))

    return blocks
