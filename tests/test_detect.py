"""Tests for format detection."""

import pytest

from bankfeed.domain.errors import INVALID_FILE_TYPE, UnsupportedFormatError
from bankfeed.parsers import FileFormat, detect_format, get_parser
from bankfeed.parsers.camt import parse_camt
from bankfeed.parsers.ofx import parse_ofx
from bankfeed.parsers.qif import parse_qif


@pytest.mark.parametrize(
    "filename,expected",
    [
        ("data.qif", FileFormat.QIF),
        ("big.data.QiF", FileFormat.QIF),
        ("data.ofx", FileFormat.OFX),
        ("best.data-ever$.QFX", FileFormat.QFX),
        ("statement.xml", FileFormat.CAMT053),
    ],
)
def test_detect_by_extension(filename, expected):
    assert detect_format(filename) == expected


@pytest.mark.parametrize("filename", ["foo.txt", "data.csv", "noextension", "qif"])
def test_unsupported_extension(filename):
    with pytest.raises(UnsupportedFormatError, match=INVALID_FILE_TYPE):
        detect_format(filename)


def test_xml_requires_camt_namespace_in_peek():
    peek = b'<?xml version="1.0"?><Document xmlns="urn:iso:std:iso:20022:tech:xsd:camt.053.001.02">'
    assert detect_format("statement.XML", peek) == FileFormat.CAMT053

    with pytest.raises(UnsupportedFormatError):
        detect_format("feed.xml", b"<?xml version='1.0'?><rss></rss>")


def test_peek_ignored_for_non_xml():
    assert detect_format("data.ofx", b"anything") == FileFormat.OFX


def test_get_parser():
    assert get_parser(FileFormat.QIF) is parse_qif
    assert get_parser(FileFormat.OFX) is parse_ofx
    assert get_parser(FileFormat.QFX) is parse_ofx
    assert get_parser(FileFormat.CAMT053) is parse_camt
