"""Unit tests for CorrelationLoggerAdapter."""

import logging

import pytest

from minihttp.domain.correlation_id import (
    CorrelationLoggerAdapter,
    clear_correlation_id,
    generate_correlation_id,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)


@pytest.fixture(name="logger_adapter")
def logger_adapter_fixture():
    yield CorrelationLoggerAdapter(logging.getLogger("minihttp.test"), {})
    clear_correlation_id()


def test_adapter_injects_correlation_id(logger_adapter):
    set_correlation_id("conn-123")
    _, kwargs = logger_adapter.process("Test message", {})
    assert kwargs["extra"]["correlation_id"] == "conn-123"


def test_adapter_defaults_correlation_id_when_missing(logger_adapter):
    clear_correlation_id()
    _, kwargs = logger_adapter.process("Test message", {})
    assert kwargs["extra"]["correlation_id"] == "-"


def test_adapter_extracts_component_from_logger_name(logger_adapter):
    _, kwargs = logger_adapter.process("Test message", {})
    assert kwargs["extra"]["component"] == "test"


def test_adapter_preserves_existing_extra_without_mutating_it(logger_adapter):
    extra = {"event": "custom", "status_code": 200}
    _, kwargs = logger_adapter.process("Test message", {"extra": extra})
    assert kwargs["extra"]["event"] == "custom"
    assert kwargs["extra"]["status_code"] == 200
    assert "correlation_id" not in extra


def test_generated_ids_are_unique():
    assert generate_correlation_id() != generate_correlation_id()


def test_get_logger_prefixes_name():
    adapter = get_logger("pipeline.io")
    assert adapter.logger.name == "minihttp.pipeline.io"


def test_correlation_id_round_trip():
    set_correlation_id("abc")
    assert get_correlation_id() == "abc"
    clear_correlation_id()
    assert get_correlation_id() is None
