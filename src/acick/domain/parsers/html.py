"""Scraper primitives shared by all pages."""

from typing import Optional, Union

from bs4 import BeautifulSoup, Tag

from acick.domain.exceptions import EmptyCsrfError, MissingCsrfError

_ZENKAKU_ZERO = 0xFF10
_ZENKAKU_NINE = 0xFF19


def parse_html(text: str) -> BeautifulSoup:
    """Parse a whole HTML document."""
    return BeautifulSoup(text, "lxml")


def find_first(elem: Union[BeautifulSoup, Tag], selector: str) -> Optional[Tag]:
    """First element matching a CSS selector, or None."""
    return elem.select_one(selector)


def inner_text(elem: Tag) -> str:
    """Concatenation of all text nodes below ``elem``, untouched."""
    return "".join(elem.strings)


def find_first_text(elem: Union[BeautifulSoup, Tag], selector: str) -> Optional[str]:
    found = find_first(elem, selector)
    return inner_text(found) if found is not None else None


def parse_zenkaku_digits(text: str) -> int:
    """Parse a decimal integer written in ASCII or full-width digits."""
    try:
        return int(text)
    except ValueError as e:
        if text and all(_ZENKAKU_ZERO <= ord(c) <= _ZENKAKU_NINE for c in text):
            return int("".join(chr(ord(c) - _ZENKAKU_ZERO + ord("0")) for c in text))
        raise e


def extract_csrf_token(elem: Union[BeautifulSoup, Tag]) -> str:
    """Value of the first ``[name="csrf_token"]`` element."""
    found = find_first(elem, '[name="csrf_token"]')
    if found is None:
        raise MissingCsrfError("Could not extract csrf token")
    token = found.get("value", "")
    if not token:
        raise EmptyCsrfError("Found empty csrf token")
    return token
