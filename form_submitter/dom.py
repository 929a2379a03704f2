"""
Thin adapter over BeautifulSoup. The resolver only talks to ElementHandle,
never to bs4 types directly.

Documents are built with html5lib, so implied end tags (`<option>One<option>Two`)
and raw text elements such as textarea produce the same tree as a browser.
"""
from typing import Iterable

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from .errors import MalformedHtml

TagNames = str | Iterable[str]


class ElementHandle:
    def __init__(self, tag: Tag):
        self._tag = tag

    @property
    def tag_name(self) -> str:
        return self._tag.name

    def get_attribute(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 splits multi-valued attributes such as class into lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def get_flag(self, name: str) -> bool:
        return self._tag.has_attr(name)

    def inner_text(self) -> str:
        return self._tag.get_text()

    def parent(self) -> "ElementHandle | None":
        parent = self._tag.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return ElementHandle(parent)

    def __eq__(self, other):
        return isinstance(other, ElementHandle) and self._tag is other._tag

    def __hash__(self):
        return id(self._tag)

    def __repr__(self):
        return f"<ElementHandle {self._tag.name} {dict(self._tag.attrs)}>"


class Document:
    def __init__(self, soup: BeautifulSoup):
        self._soup = soup

    @property
    def root(self) -> ElementHandle:
        return ElementHandle(self._soup)


def parse(html: str) -> Document:
    if not isinstance(html, str):
        raise MalformedHtml(f"Cannot parse HTML, expected a string but got {type(html).__name__}.")
    try:
        soup = BeautifulSoup(html, "html5lib")
    except ParserRejectedMarkup as e:
        raise MalformedHtml(f"Cannot parse HTML: {e}") from e
    return Document(soup)


def _tag_list(tag_names: TagNames) -> list[str]:
    if isinstance(tag_names, str):
        return [tag_names]
    return list(tag_names)


def find_all(root: ElementHandle, tag_names: TagNames) -> list[ElementHandle]:
    """
    Returns the descendants of `root` with one of the given tag names,
    in document order.
    """
    return [ElementHandle(tag) for tag in root._tag.find_all(_tag_list(tag_names))]


def find_by_attribute(root: ElementHandle, tag_names: TagNames, attr: str, value: str) -> list[ElementHandle]:
    return [
        element for element in find_all(root, tag_names)
        if element.get_attribute(attr) == value
    ]
