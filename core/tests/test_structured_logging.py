"""Tests for run/phase correlated logging."""

import logging
import tempfile
import unittest
from pathlib import Path

from core.structured_logging import (
    _RunContextFilter,
    configure_structured_logging,
    get_phase,
    get_run_id,
    phase_scope,
    set_run_id,
)


class TestStructuredLogging(unittest.TestCase):
    def test_set_run_id_generates_value(self) -> None:
        run_id = set_run_id()
        self.assertTrue(run_id)
        self.assertEqual(get_run_id(), run_id)

    def test_set_explicit_run_id(self) -> None:
        self.assertEqual(set_run_id("run-42"), "run-42")
        self.assertEqual(get_run_id(), "run-42")

    def test_phase_scope_restores(self) -> None:
        before = get_phase()
        with phase_scope("extract"):
            self.assertEqual(get_phase(), "extract")
            with phase_scope("write"):
                self.assertEqual(get_phase(), "write")
            self.assertEqual(get_phase(), "extract")
        self.assertEqual(get_phase(), before)

    def test_filter_injects_fields(self) -> None:
        set_run_id("run-7")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        with phase_scope("load"):
            self.assertTrue(_RunContextFilter().filter(record))
        self.assertEqual(record.run_id, "run-7")
        self.assertEqual(record.phase, "load")


class TestFileSink(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        root_logger = logging.getLogger()
        self._handlers = list(root_logger.handlers)
        self._level = root_logger.level

    def tearDown(self) -> None:
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            if handler not in self._handlers:
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(self._level)
        self.tmp.cleanup()

    def test_record_lands_in_log_file(self) -> None:
        log_file = Path(self.tmp.name) / "logs" / "run.log"
        configure_structured_logging(level=logging.INFO, log_file=log_file)
        set_run_id("run-file")
        with phase_scope("write"):
            logging.getLogger("core.tests").info("descriptor document written")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        self.assertIn("descriptor document written", text)
        self.assertIn("run_id=run-file", text)
        self.assertIn("phase=write", text)


if __name__ == "__main__":
    unittest.main()
