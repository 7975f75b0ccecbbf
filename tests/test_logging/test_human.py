"""
Tests for the HUMAN logging pipeline.
"""

import io
import logging

import structlog

from skillsync.config import LoggingConfig
from skillsync.logging import HUMAN, HumanFormatter, HumanLog, HumanLogHandler, configure_logging


class TestHumanFormatter:
    def setup_method(self):
        self.fmt = HumanFormatter()

    def test_skill_synced(self):
        line = self.fmt.format_event("sync.skill_synced", source="vueuse-functions", output="vueuse")
        assert line == "  vueuse-functions → vueuse"

    def test_behind(self):
        line = self.fmt.format_event("check.behind", label="vue", kind="source", behind=3)
        assert line == "  vue (source): 3 commits behind"

    def test_sync_complete_clean(self):
        line = self.fmt.format_event("sync.complete", synced=2, skipped=0, failed=0)
        assert "All skills synced" in line

    def test_sync_complete_partial(self):
        line = self.fmt.format_event("sync.complete", synced=2, skipped=1, failed=0)
        assert line == "\n⚡ Skills synced (2 synced, 1 skipped, 0 failed)"

    def test_already_initialized(self):
        line = self.fmt.format_event("init.already_initialized", names=["vue", "vite"])
        assert line == "Already initialized: vue, vite"

    def test_unknown_event(self):
        assert self.fmt.format_event("something.else") is None


class TestHumanLogHandler:
    def test_formats_structlog_event_dict(self):
        stream = io.StringIO()
        handler = HumanLogHandler(stream=stream)
        record = logging.LogRecord("x", HUMAN, "", 0, {"event": "check.fetched"}, (), None)
        handler.emit(record)
        assert stream.getvalue() == "✓ Fetched remote changes\n"

    def test_ignores_other_levels(self):
        stream = io.StringIO()
        handler = HumanLogHandler(stream=stream)
        record = logging.LogRecord("x", logging.INFO, "", 0, {"event": "check.fetched"}, (), None)
        handler.emit(record)
        assert stream.getvalue() == ""


class TestConfigureLogging:
    def test_human_events_reach_stderr(self, capsys):
        configure_logging(LoggingConfig())
        try:
            HumanLog(structlog.get_logger("test")).up_to_date()
            assert "All submodules are up to date" in capsys.readouterr().err
        finally:
            configure_logging(LoggingConfig(), quiet=True)

    def test_json_file_pipeline(self, tmp_path):
        log_file = tmp_path / "logs" / "skillsync.jsonl"
        configure_logging(LoggingConfig(file=log_file), quiet=True)
        try:
            structlog.get_logger("test").info("registry.loaded", vendors=3)
            for handler in logging.root.handlers:
                handler.flush()
            content = log_file.read_text()
            assert '"event": "registry.loaded"' in content
            assert '"vendors": 3' in content
        finally:
            configure_logging(LoggingConfig(), quiet=True)
