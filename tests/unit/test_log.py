from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from traceview.log import LOGGER_NAME, resolve_level, setup_logging


class SetupLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        setup_logging()

    def test_without_file_installs_null_handler(self) -> None:
        logger = setup_logging()

        self.assertEqual(logger.name, LOGGER_NAME)
        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)
        self.assertFalse(logger.propagate)

    def test_file_handler_writes_formatted_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "traceview.log"
            logger = setup_logging(log_path, level="DEBUG")

            logging.getLogger("traceview.viewer.keys").debug("cursor=%d", 4)
            for handler in logger.handlers:
                handler.flush()
            text = log_path.read_text(encoding="utf-8")
            setup_logging()

        self.assertIn("| DEBUG | traceview.viewer.keys | cursor=4", text)

    def test_repeat_setup_replaces_handlers(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "traceview.log"
            setup_logging(log_path)
            logger = setup_logging(log_path)

            self.assertEqual(len(logger.handlers), 1)
            setup_logging()

    def test_unknown_environment_level_falls_back_to_info(self) -> None:
        with mock.patch.dict(os.environ, {"TRACEVIEW_LOG_LEVEL": "verbose"}):
            logger = setup_logging()

        self.assertEqual(logger.level, logging.INFO)

    def test_resolve_level_accepts_known_names_and_numbers(self) -> None:
        self.assertEqual(resolve_level(" debug "), "DEBUG")
        self.assertEqual(resolve_level(logging.ERROR), logging.ERROR)
        self.assertEqual(resolve_level("loud"), "INFO")

    def test_level_defaults_to_environment(self) -> None:
        with mock.patch.dict(os.environ, {"TRACEVIEW_LOG_LEVEL": "warning"}):
            logger = setup_logging()

        self.assertEqual(logger.level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
