"""Scraping primitives."""

from .html import (
    extract_csrf_token,
    find_first,
    find_first_text,
    inner_text,
    parse_html,
    parse_zenkaku_digits,
)

__all__ = [
    "extract_csrf_token",
    "find_first",
    "find_first_text",
    "inner_text",
    "parse_html",
    "parse_zenkaku_digits",
]
