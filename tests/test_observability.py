"""Tests for logging configuration and Prometheus metrics."""

import json
import logging

import pytest
from prometheus_client import REGISTRY

from s3presign import metrics
from s3presign.logging_config import JSONFormatter, RedactSecretsFilter, configure_logging

SECRET_KEY = "wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY"


def _record(msg: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord("s3presign.client", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    """Restore the root logger's handlers and level after a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestJSONFormatter:
    """Tests for structured log output."""

    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(_record("hello %s", "world")))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "s3presign.client"
        assert entry["message"] == "hello world"
        assert "timestamp" in entry

    def test_extra_fields(self):
        record = _record("HEAD text.txt", operation="head", key="text.txt", status=200)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["operation"] == "head"
        assert entry["key"] == "text.txt"
        assert entry["status"] == 200
        assert "duration_ms" not in entry


class TestRedactSecretsFilter:
    """Tests for secret masking."""

    def test_secret_masked(self):
        record = _record("loaded secret %s", SECRET_KEY)
        assert RedactSecretsFilter([SECRET_KEY]).filter(record) is True
        assert SECRET_KEY not in record.getMessage()
        assert "****" in record.getMessage()

    def test_other_messages_untouched(self):
        record = _record("signed %s", "text.txt")
        RedactSecretsFilter([SECRET_KEY]).filter(record)
        assert record.getMessage() == "signed text.txt"

    def test_empty_secrets_ignored(self):
        record = _record("nothing to hide")
        RedactSecretsFilter(["", None]).filter(record)
        assert record.getMessage() == "nothing to hide"


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_text_format(self, restore_root_logger):
        configure_logging("DEBUG", "text")
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_json_format(self, restore_root_logger):
        configure_logging("warning", "json")
        root = restore_root_logger
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_secret_filter_installed(self, restore_root_logger):
        configure_logging("INFO", "text", secrets=[SECRET_KEY])
        filters = restore_root_logger.handlers[0].filters
        assert any(isinstance(f, RedactSecretsFilter) for f in filters)

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        configure_logging("LOUD")
        assert restore_root_logger.level == logging.INFO


class TestMetrics:
    """Tests for Prometheus counters."""

    def test_init_idempotent(self):
        metrics.init_metrics()
        first = metrics.signatures_total
        metrics.init_metrics()
        assert metrics.signatures_total is first

    def test_signatures_counted(self, s3, now):
        metrics.init_metrics()
        labels = {"kind": "presigned_get"}
        before = REGISTRY.get_sample_value("s3presign_signatures_total", labels) or 0.0
        s3.generate_presigned_get("example.png", 3600, now=now)
        after = REGISTRY.get_sample_value("s3presign_signatures_total", labels)
        assert after == before + 1

    def test_post_and_header_kinds(self, s3, now):
        metrics.init_metrics()
        for kind in ("presigned_post", "header"):
            labels = {"kind": kind}
            before = REGISTRY.get_sample_value("s3presign_signatures_total", labels) or 0.0
            if kind == "header":
                s3.prepare_simple_object_request("a.txt", "HEAD", now=now)
            else:
                s3.generate_presigned_post("a.txt", "text/plain", 10, 60, now=now)
            after = REGISTRY.get_sample_value("s3presign_signatures_total", labels)
            assert after == before + 1

    def test_requests_counted(self, mock_s3):
        metrics.init_metrics()
        labels = {"method": "DELETE", "status": "204"}
        before = REGISTRY.get_sample_value("s3presign_requests_total", labels) or 0.0
        mock_s3.delete_object("text.txt")
        after = REGISTRY.get_sample_value("s3presign_requests_total", labels)
        assert after == before + 1

    def test_record_is_noop_when_disabled(self, monkeypatch):
        monkeypatch.setattr(metrics, "signatures_total", None)
        monkeypatch.setattr(metrics, "requests_total", None)
        metrics.record_signature("header")
        metrics.record_request("HEAD", 200)

    def test_write_textfile(self, tmp_path, s3, now):
        metrics.init_metrics()
        s3.prepare_simple_object_request("a.txt", "HEAD", now=now)
        path = tmp_path / "s3presign.prom"
        metrics.write_textfile(str(path))
        assert 's3presign_signatures_total{kind="header"}' in path.read_text()
