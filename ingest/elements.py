# Description: Read-only accessors over BeautifulSoup tags.
# The converter only ever looks at a tag through these helpers:
# name, attributes, direct children, subtree select, flattened text,
# raw text and verbatim markup.

import re
from typing import List, Optional

from bs4 import NavigableString, Tag
from bs4.element import CData, PreformattedString

# Elements that get a space around their text when flattened
BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "body", "caption", "dd",
    "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr", "html", "li", "main",
    "nav", "ol", "p", "pre", "section", "table", "tbody", "td", "tfoot",
    "th", "thead", "tr", "ul",
}

_WS = re.compile(r"[ \t\n\r\f\xa0]+")
_WS_CHARS = " \t\n\r\f\xa0"


def tag_name(el: Tag) -> str:
    return (el.name or "").lower()


# missing attribute -> "", multi-valued (class, rel) -> space-joined
def attr(el: Tag, name: str) -> str:
    value = el.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return value


def children(el: Tag) -> List[Tag]:
    return el.find_all(recursive=False)


# all descendants with any of the given names, in document order
def select(el: Tag, *names: str) -> List[Tag]:
    return el.find_all(list(names))


def select_first(el: Tag, name: str) -> Optional[Tag]:
    return el.find(name)


def _is_text(node) -> bool:
    if not isinstance(node, NavigableString):
        return False
    # comments, doctypes, processing instructions carry no visible text
    return not isinstance(node, PreformattedString) or isinstance(node, CData)


def _ends_with_space(buf: List[str]) -> bool:
    return bool(buf) and buf[-1][-1] in _WS_CHARS


def _append_normalised(text: str, buf: List[str]):
    collapsed = _WS.sub(" ", text)
    if collapsed.startswith(" ") and (not buf or _ends_with_space(buf)):
        collapsed = collapsed[1:]
    if collapsed:
        buf.append(collapsed)


def _collect_text(node: Tag, buf: List[str], preserve: bool):
    for child in node.children:
        if isinstance(child, Tag):
            name = tag_name(child)
            is_block = name in BLOCK_TAGS
            if (is_block or name == "br") and buf and not _ends_with_space(buf):
                buf.append(" ")
            _collect_text(child, buf, preserve or name == "pre")
            if is_block and _is_text(child.next_sibling) and buf and not _ends_with_space(buf):
                buf.append(" ")
        elif _is_text(child):
            if preserve:
                if child:
                    buf.append(str(child))
            else:
                _append_normalised(str(child), buf)


def text_content(el: Tag) -> str:
    """
    Flattened text of an element and everything under it.

    Whitespace runs collapse to a single space and block boundaries
    (and <br>) become one space, so no line breaks are introduced.
    Text below a <pre> keeps its whitespace untouched, which is the
    only way a newline survives into the result.
    """
    buf: List[str] = []
    _collect_text(el, buf, preserve=tag_name(el) == "pre")
    return "".join(buf).strip()


# descendant text with internal whitespace and line breaks kept
def raw_text(el: Tag) -> str:
    return el.get_text().strip()


def outer_html(el: Tag) -> str:
    return str(el)
