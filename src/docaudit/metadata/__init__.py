"""Metadata module — review-date codec for front matter and legacy markers."""

from docaudit.metadata.codec import (
    format_date,
    parse,
    parse_date,
    read_review_date,
    write,
)

__all__ = ["format_date", "parse", "parse_date", "read_review_date", "write"]
