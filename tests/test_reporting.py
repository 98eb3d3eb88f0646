"""Tests for the import error reporter."""

import dataclasses
import pytest

from bankfeed.domain.entities import ImportErrorEntry, ImportStatus
from bankfeed.domain.reporting import ErrorReporter


def test_clean_result():
    result = ErrorReporter().build(added=[1, 2], updated=[3])

    assert result.status == ImportStatus.CLEAN
    assert result.added == frozenset({1, 2})
    assert result.updated == frozenset({3})
    assert result.errors == ()


def test_partial_result_keeps_errors_in_order():
    reporter = ErrorReporter()
    reporter.add("first", "Record 1")
    reporter.extend([ImportErrorEntry("second", "Record 2")])
    result = reporter.build(added=[5])

    assert result.status == ImportStatus.PARTIAL
    assert [e.message for e in result.errors] == ["first", "second"]
    assert result.errors[0].source_ref == "Record 1"
    assert result.added == frozenset({5})


def test_fatal_replaces_collected_errors():
    reporter = ErrorReporter()
    reporter.add("bad record")
    result = reporter.fatal("Invalid file type")

    assert result.status == ImportStatus.FATAL
    assert result.errors == (ImportErrorEntry("Invalid file type"),)
    assert result.added == frozenset()
    assert result.updated == frozenset()

    # Later builds stay fatal and ignore the ids passed in
    assert reporter.build(added=[1]).added == frozenset()


def test_result_is_immutable():
    result = ErrorReporter().build()
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.fatal = True
