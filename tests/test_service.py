"""Tests for request validation and conversion history."""

import json
import logging

import pytest
from pydantic import ValidationError

from service.config import Settings
from service.logging import StructuredFormatter
from service.schema import ConvertCodeRequest, SkillLevel
from service.storage import ConversionStore


def make_request(**overrides):
    body = {
        "sourceCode": "console.log(1);",
        "sourceLanguage": "javascript",
        "targetLanguage": "python",
    }
    body.update(overrides)
    return ConvertCodeRequest.model_validate(body)


def test_request_accepts_camel_case():
    request = make_request(skillLevel="beginner")
    assert request.source_code == "console.log(1);"
    assert request.skill_level is SkillLevel.BEGINNER


def test_request_rejects_blank_source():
    with pytest.raises(ValidationError) as excinfo:
        make_request(sourceCode="   ")
    assert "Source code is required" in str(excinfo.value)


def test_request_rejects_unknown_language():
    with pytest.raises(ValidationError) as excinfo:
        make_request(targetLanguage="cobol")
    assert "Unknown language 'cobol'" in str(excinfo.value)


def test_request_rejects_missing_field():
    with pytest.raises(ValidationError):
        ConvertCodeRequest.model_validate({"sourceCode": "x = 1"})


def test_store_assigns_increasing_ids():
    store = ConversionStore()
    first = store.create("a", "b", "javascript", "python", "{}")
    second = store.create("c", "d", "python", "java", "{}")
    assert (first.id, second.id) == (1, 2)
    assert store.get(1) == first
    assert store.get(99) is None
    assert [record.id for record in store.list()] == [2, 1]


def test_record_serialises_camel_case():
    record = ConversionStore().create("a", "b", "javascript", "python", "{}")
    data = record.model_dump(by_alias=True)
    assert data["sourceLanguage"] == "javascript"
    assert data["targetCode"] == "b"
    assert "createdAt" in data


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.PORT == 5000
    assert settings.LOG_FORMAT == "text"


def test_structured_formatter():
    """Test JSON log lines carry level, logger and message"""
    record = logging.LogRecord("converter.registry", logging.INFO, __file__, 10, "converted %s", ("x",), None)
    data = json.loads(StructuredFormatter().format(record))
    assert data["level"] == "INFO"
    assert data["logger"] == "converter.registry"
    assert data["message"] == "converted x"
