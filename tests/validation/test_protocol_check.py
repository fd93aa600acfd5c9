"""Tests for the ProtocolCheck validation."""

import pytest

from tool_directory.core.enums import IssueKind, RecordSource
from tool_directory.core.schemas import ToolRecord
from tool_directory.validation.checks.protocol import ProtocolCheck
from tool_directory.validation.config import ValidationConfig


def _record(url):
    return ToolRecord(title="Tool", slug=None, url=url, category="Chat", source=RecordSource.SPLIT)


@pytest.mark.parametrize(
    "url",
    ["http://example.com", "https://example.com/?ref=riseofmachine.com"],
)
def test_accepted_schemes_pass(url):
    assert ProtocolCheck().validate(_record(url), ValidationConfig()) == []


@pytest.mark.parametrize("url", ["ftp://x.com", "example.com", "HTTPS://example.com", "//cdn.example.com"])
def test_missing_protocol_flagged(url):
    results = ProtocolCheck().validate(_record(url), ValidationConfig())

    assert len(results) == 1
    assert results[0].kind == IssueKind.MISSING_PROTOCOL
    assert results[0].url == url
    assert results[0].source == RecordSource.SPLIT


def test_custom_schemes_from_config():
    config = ValidationConfig(accepted_schemes=("https://",))
    results = ProtocolCheck().validate(_record("http://example.com"), config)
    assert [r.kind for r in results] == [IssueKind.MISSING_PROTOCOL]


def test_record_without_url_is_ignored():
    assert ProtocolCheck().validate(_record(None), ValidationConfig()) == []
