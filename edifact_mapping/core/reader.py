from __future__ import annotations

"""Loading of mapping documents from disk.

Both failure points (obtaining the bytes, parsing them) are reported as a
:class:`LoadFailure` value so batch callers can skip bad entries.
"""

import logging
from pathlib import Path
from typing import Union

from lxml import etree as ET

from edifact_mapping.core.models import FailureKind, LoadFailure

logger = logging.getLogger(__name__)

__all__ = ["read_document", "parse_document"]


def _make_parser() -> ET.XMLParser:
    # entity expansion stays off for documents we did not author
    return ET.XMLParser(resolve_entities=False, no_network=True)


def parse_document(data: bytes, source: str = "<memory>") -> Union[ET._Element, LoadFailure]:
    """Parse *data* and return its root element or a PARSE failure."""
    try:
        return ET.fromstring(data, _make_parser())
    except ET.XMLSyntaxError as exc:
        logger.warning("XML syntax error in %s: %s", source, exc)
        return LoadFailure(FailureKind.PARSE, source, str(exc))


def read_document(path: Union[str, Path]) -> Union[ET._Element, LoadFailure]:
    """Read and parse the XML file at *path*.

    Returns:
        The root element, or a ``LoadFailure`` of kind ``READ`` (missing file,
        permission denied…) or ``PARSE`` (not well-formed XML).
    """
    source = str(path)
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        logger.warning("Cannot read mapping file %s: %s", source, exc)
        return LoadFailure(FailureKind.READ, source, str(exc))

    logger.debug("Read %d bytes from %s", len(data), source)
    return parse_document(data, source)
