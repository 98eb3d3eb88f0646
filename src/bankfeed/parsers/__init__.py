"""Statement file parsers and format detection."""

from bankfeed.parsers.base import FileFormat, ParseResult, Parser
from bankfeed.parsers.detect import PEEK_SIZE, detect_format, get_parser

__all__ = ["FileFormat", "ParseResult", "Parser", "PEEK_SIZE", "detect_format", "get_parser"]
