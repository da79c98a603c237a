"""
Documentation comment summaries.

Symbols carry their XML documentation comment as raw text, e.g.::

    <doc>
        <summary>
            A customer account.
        </summary>
    </doc>

Only the ``<summary>`` text is exported.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Optional

from symbols.model import InfoLocation

logger = logging.getLogger(__name__)

SUMMARY_TAG = "summary"


@dataclass(frozen=True)
class DocParseResult:
    """Outcome of parsing one documentation comment."""

    summary: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_summary(raw_comment: str) -> DocParseResult:
    """Parse a documentation comment and pull out its summary text.

    The comment must be a single well-formed XML element; the summary is the
    text content of its first descendant ``<summary>`` element, trimmed.

    Args:
        raw_comment: Raw documentation comment text.

    Returns:
        A result holding the summary (``None`` if there is no summary, ``""``
        if it is blank), or the parse error message.
    """
    try:
        root = ET.fromstring(raw_comment)
    except ET.ParseError as exc:
        return DocParseResult(error=str(exc))

    node = root.find(f".//{SUMMARY_TAG}")
    if node is None:
        return DocParseResult()
    text = "".join(node.itertext()).strip()
    return DocParseResult(summary=text)


def extract_summary(symbol) -> Optional[str]:
    """Return the documentation summary of a symbol, or None.

    External symbols are skipped without touching their comment, since the
    provider cannot read comments outside the project. A malformed comment
    is logged and treated as absent.
    """
    if symbol.info_location is not InfoLocation.PROJECT:
        return None

    comment = symbol.doc_comment
    if comment is None or not comment.strip():
        return None

    result = parse_summary(comment)
    if not result.ok:
        logger.warning(
            "Couldn't parse XML doc comment for %s: %s",
            symbol.full_name,
            result.error,
        )
        return None
    return result.summary
