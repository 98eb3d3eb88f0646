"""Select a parser for a statement file."""

import logging
import re
from typing import Optional

from bankfeed.domain.errors import INVALID_FILE_TYPE, UnsupportedFormatError
from bankfeed.parsers.base import FileFormat, Parser
from bankfeed.parsers.camt import parse_camt
from bankfeed.parsers.ofx import parse_ofx
from bankfeed.parsers.qif import parse_qif

logger = logging.getLogger(__name__)

# Number of leading bytes callers should read for ``peek``.
PEEK_SIZE = 512

_EXTENSION_RE = re.compile(r"\.([A-Za-z0-9]+)\s*$")

_EXTENSIONS = {
    "qif": FileFormat.QIF,
    "ofx": FileFormat.OFX,
    "qfx": FileFormat.QFX,
    "xml": FileFormat.CAMT053,
}

PARSERS: dict[FileFormat, Parser] = {
    FileFormat.QIF: parse_qif,
    FileFormat.OFX: parse_ofx,
    FileFormat.QFX: parse_ofx,
    FileFormat.CAMT053: parse_camt,
}


def detect_format(filename: str, peek: Optional[bytes] = None) -> FileFormat:
    """Return the format of a file from its name and optional leading bytes.

    The extension is matched case-insensitively; anything before it is
    ignored, so names like ``best.data-ever$.QFX`` are accepted. ``.xml``
    files are only accepted when ``peek`` (if given) looks like CAMT.053.

    Raises:
        UnsupportedFormatError: If the file type is not supported
    """
    match = _EXTENSION_RE.search(filename)
    fmt = _EXTENSIONS.get(match.group(1).lower()) if match else None

    if fmt is FileFormat.CAMT053 and peek is not None and b"camt.053" not in peek.lower():
        fmt = None

    if fmt is None:
        logger.info("Rejected %r: unsupported file type", filename)
        raise UnsupportedFormatError(INVALID_FILE_TYPE)

    logger.debug("Detected %s for %r", fmt.value, filename)
    return fmt


def get_parser(fmt: FileFormat) -> Parser:
    """Return the parser registered for a format."""
    return PARSERS[fmt]
