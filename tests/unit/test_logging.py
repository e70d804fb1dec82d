# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for logging configuration."""

import json
import logging
from contextlib import contextmanager

from fluency.core.config.settings import DatabaseSettings, Settings
from fluency.utils.logging import setup_logging


@contextmanager
def _restored_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield
    finally:
        root.handlers = handlers
        root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_production_renders_json_with_extra_fields(self, capsys) -> None:
        settings = Settings(
            environment="production",
            debug=False,
            log_level="INFO",
            db=DatabaseSettings(password="strong-password"),  # type: ignore[arg-type]
        )
        with _restored_root_logger():
            setup_logging(settings)
            logging.getLogger("fluency.core.sync.updator").warning(
                "Cache write failed for %s", "course", extra={"operation": "cache_set"}
            )

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "Cache write failed for course"
        assert event["operation"] == "cache_set"
        assert event["level"] == "warning"
        assert event["logger"] == "fluency.core.sync.updator"

    def test_level_and_noisy_loggers(self) -> None:
        with _restored_root_logger():
            setup_logging(Settings(log_level="ERROR"))

            assert logging.getLogger().level == logging.ERROR
            assert logging.getLogger("sqlalchemy").level == logging.WARNING
