import logging

import pytest

from app.shared.utils import logging as app_logging


@pytest.fixture
def fresh_logging(monkeypatch):
    """Let setup_logging run again and put the root logger back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr(app_logging, "_logging_configured", False)
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    def test_explicit_options_do_not_read_environment(self, fresh_logging, monkeypatch):
        def no_environment():
            raise AssertionError("settings should not be loaded")

        monkeypatch.setattr(app_logging, "get_settings", no_environment)

        logger = app_logging.setup_logging("ERROR", "text", enable_console=False)

        assert logger.name == "startup"
        assert logging.getLogger().level == logging.ERROR

    def test_missing_option_falls_back_to_settings(self, fresh_logging, settings, monkeypatch):
        monkeypatch.setattr(app_logging, "get_settings", lambda: settings)

        app_logging.setup_logging(log_format="json", enable_console=False)

        assert logging.getLogger().level == getattr(logging, settings.LOG_LEVEL.upper())

    def test_request_id_stamped_on_records(self):
        token = app_logging.request_id_var.set("req-42")
        try:
            record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
            app_logging.RequestContextFilter().filter(record)
        finally:
            app_logging.request_id_var.reset(token)

        assert record.request_id == "req-42"
        assert record.service == "videotube-api"
