# Description: Convert the top-level blocks of an HTML body to Markdown.
# Each direct child of <body> is routed by tag name to one renderer.
# Keeps headings/paragraphs/lists/quotes/pre/images/tables,
# anything else is passed through as raw HTML.
# Returns one Markdown string, blocks separated by a blank line.

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, Dict

from bs4 import Tag

from ingest.elements import (
    attr,
    children,
    outer_html,
    raw_text,
    select,
    select_first,
    tag_name,
    text_content,
)

BLOCK_SEPARATOR = "\n\n"
CODE_FENCE = "```"


class BlockKind(Enum):
    HEADER = "header"
    PARAGRAPH = "paragraph"
    LIST = "list"
    BLOCKQUOTE = "blockquote"
    PREFORMATTED = "preformatted"
    IMAGE = "image"
    TABLE = "table"
    FALLBACK = "fallback"


# closed tag table; anything missing here is FALLBACK
TAG_KINDS: Dict[str, BlockKind] = {
    **{f"h{level}": BlockKind.HEADER for level in range(1, 7)},
    "p": BlockKind.PARAGRAPH,
    "ul": BlockKind.LIST,
    "ol": BlockKind.LIST,
    "blockquote": BlockKind.BLOCKQUOTE,
    "pre": BlockKind.PREFORMATTED,
    "img": BlockKind.IMAGE,
    "table": BlockKind.TABLE,
}


def classify(el: Tag) -> BlockKind:
    return TAG_KINDS.get(tag_name(el), BlockKind.FALLBACK)


# <h3>Title</h3> -> "### Title"
def render_header(el: Tag) -> str:
    level = int(tag_name(el)[1:])
    return "#" * level + " " + text_content(el)


def render_paragraph(el: Tag) -> str:
    return text_content(el)


# every <li> in the subtree, so nested lists come out flattened
# under the outer list's bullet/numbering
def render_list(el: Tag) -> str:
    lines = []
    items = select(el, "li")
    if tag_name(el) == "ol":
        for n, li in enumerate(items, start=1):
            lines.append(f"{n}. {text_content(li)}\n")
    else:
        for li in items:
            lines.append(f"- {text_content(li)}\n")
    return "".join(lines)


def render_blockquote(el: Tag) -> str:
    return "> " + text_content(el).replace("\n", "\n> ")


def render_preformatted(el: Tag) -> str:
    return f"{CODE_FENCE}\n{raw_text(el)}\n{CODE_FENCE}"


# alt/src are embedded as-is, brackets and parentheses included
def render_image(el: Tag) -> str:
    alt = attr(el, "alt")
    src = attr(el, "src")
    return "![" + (alt if alt else "Image") + "](" + src + ")"


def render_table_section(section: Tag) -> str:
    """
    Render the rows of a <thead> or <tbody>.

    Every <tr> below the section becomes one pipe row built from its
    <td>/<th> cells. A single dash separator follows the rows, sized
    from the first row only; later rows with a different cell count
    do not change it. A <tbody> on its own still gets this separator,
    so Markdown renderers read its first row as the header.
    """
    out = []
    rows = select(section, "tr")
    for row in rows:
        for cell in select(row, "td", "th"):
            out.append("| " + text_content(cell).replace("|", "&#124;") + " ")
        out.append("|\n")

    if rows:
        out.append("|---" * len(select(rows[0], "td", "th")))
        out.append("|\n")
    return "".join(out)


def render_table(el: Tag) -> str:
    out = []
    for name in ("thead", "tbody"):
        section = select_first(el, name)
        if section is not None:
            out.append(render_table_section(section) + "\n")
    return "".join(out)


# no conversion for unknown blocks (div, section, span...): keep the HTML
def render_fallback(el: Tag) -> str:
    return outer_html(el)


RENDERERS: Dict[BlockKind, Callable[[Tag], str]] = {
    BlockKind.HEADER: render_header,
    BlockKind.PARAGRAPH: render_paragraph,
    BlockKind.LIST: render_list,
    BlockKind.BLOCKQUOTE: render_blockquote,
    BlockKind.PREFORMATTED: render_preformatted,
    BlockKind.IMAGE: render_image,
    BlockKind.TABLE: render_table,
    BlockKind.FALLBACK: render_fallback,
}


def render_block(el: Tag) -> str:
    kind = classify(el)
    logging.debug(f"<{tag_name(el)}> -> {kind.value}")
    return RENDERERS[kind](el)


def convert(body: Tag, workers: int = 1) -> str:
    """
    Convert the direct children of ``body`` to Markdown.

    Every block is followed by exactly one blank line. With ``workers``
    above 1 the blocks are rendered on a thread pool; results come back
    in child order, so the output is the same as the sequential pass.
    """
    blocks = children(body)
    if workers > 1 and len(blocks) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            fragments = list(pool.map(render_block, blocks))
    else:
        fragments = [render_block(el) for el in blocks]

    logging.debug(f"Converted {len(fragments)} top-level blocks")
    return "".join(fragment + BLOCK_SEPARATOR for fragment in fragments)
