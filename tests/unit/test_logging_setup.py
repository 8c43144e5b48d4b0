import json
import logging
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from tintgrid_core.logging_setup import JsonFormatter, configure_logging, get_logger


class LoggingSetupTests(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("tintgrid")
        self.saved = (list(self.logger.handlers), self.logger.level)
        self.logger.handlers = []

    def tearDown(self):
        self.logger.handlers, level = self.saved
        self.logger.setLevel(level)

    def test_json_formatter_includes_event(self):
        record = logging.LogRecord("tintgrid.dither", logging.INFO, __file__, 1, "took %d ms", (5,), None)
        record.event = "dither_precompute"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["msg"], "took 5 ms")
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "tintgrid.dither")
        self.assertEqual(payload["event"], "dither_precompute")
        self.assertIn("ts_utc", payload)

    def test_configure_attaches_handlers_once(self):
        configure_logging(level="INFO")
        configure_logging(level="DEBUG")
        self.assertEqual(len(self.logger.handlers), 1)
        self.assertIsInstance(self.logger.handlers[0].formatter, JsonFormatter)
        self.assertEqual(self.logger.level, logging.DEBUG)

    def test_plain_text_console(self):
        configure_logging(json_output=False)
        self.assertNotIsInstance(self.logger.handlers[0].formatter, JsonFormatter)

    def test_get_logger(self):
        self.assertIs(get_logger(), self.logger)


if __name__ == "__main__":
    unittest.main()
