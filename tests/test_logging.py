import logging
import logging.handlers

import structlog

from persistent_include.utils.logging import setup_logging


def test_console_logging_uses_stderr(capsys):
    """Verify log records never reach stdout."""
    setup_logging(verbose=True)
    logging.getLogger("persistent_include.test").warning("stderr only")
    structlog.get_logger().warning("structured_event")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "stderr only" in captured.err
    assert "structured_event" in captured.err


def test_no_json_file_without_directory(tmp_path, monkeypatch):
    """Verify no JSON handler is installed when no log directory is known."""
    monkeypatch.delenv("PERSISTENT_INCLUDE_LOG_DIR", raising=False)
    setup_logging()
    handlers = logging.getLogger().handlers
    assert not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)


def test_debug_level(tmp_path):
    """Verify --debug lowers the console level to DEBUG."""
    setup_logging(debug=True, log_dir=tmp_path)
    levels = {h.level for h in logging.getLogger().handlers}
    assert logging.DEBUG in levels
