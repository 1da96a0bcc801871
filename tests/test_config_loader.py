import tempfile
import unittest
from datetime import timedelta
from pathlib import Path

from boxer.config_loader import load_config, parse_config
from boxer.services.scheduler import ConfigurationError

SAMPLE = """
work_dir: /tmp/boxer-work
ticker:
  tick_interval: 500ms
wallpaper:
  enabled: true
  step: 30s
  interval: 1h
  foreground: "#FF0000"
  background: "00ff00"
menubar:
  enabled: true
telegram:
  bot_token: "123:abc"
  chat_ids: [1, "2"]
  step: 5m
  interval: 1h
  dry_run: true
"""


class LoadConfigTests(unittest.TestCase):
    def _write(self, text: str) -> Path:
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
        with handle:
            handle.write(text)
        path = Path(handle.name)
        self.addCleanup(path.unlink)
        return path

    def test_loads_sections(self):
        config = load_config(self._write(SAMPLE))

        self.assertEqual(config.work_dir, Path("/tmp/boxer-work"))
        self.assertEqual(config.ticker.tick_interval, timedelta(milliseconds=500))
        self.assertTrue(config.wallpaper.enabled)
        self.assertEqual(config.wallpaper.step, timedelta(seconds=30))
        self.assertEqual(config.wallpaper.interval, timedelta(hours=1))
        self.assertEqual(config.wallpaper.foreground, (255, 0, 0))
        self.assertEqual(config.wallpaper.background, (0, 255, 0))
        self.assertTrue(config.menubar.enabled)
        self.assertEqual(config.menubar.step, timedelta(minutes=1))
        self.assertEqual(config.menubar.interval, timedelta(minutes=15))
        self.assertFalse(config.announcement.enabled)
        self.assertIsNotNone(config.telegram)
        assert config.telegram is not None
        self.assertEqual(config.telegram.chat_ids, (1, 2))
        self.assertEqual(config.telegram.step, timedelta(minutes=5))
        self.assertTrue(config.telegram.dry_run)
        self.assertTrue(config.telegram.enabled)

    def test_empty_file_uses_defaults(self):
        config = load_config(self._write(""))

        self.assertIsNone(config.work_dir)
        self.assertIsNone(config.telegram)
        self.assertFalse(config.wallpaper.enabled)
        self.assertEqual(config.wallpaper.foreground, (0x9A, 0xC9, 0x7C))
        self.assertEqual(config.ticker.tick_interval, timedelta(seconds=1))

    def test_root_must_be_mapping(self):
        with self.assertRaises(ConfigurationError):
            load_config(self._write("- one\n- two\n"))

    def test_unknown_duration_unit(self):
        with self.assertRaisesRegex(ConfigurationError, "duration"):
            load_config(self._write(SAMPLE.replace("500ms", "5x")))

    def test_malformed_yaml(self):
        with self.assertRaisesRegex(ConfigurationError, "invalid YAML"):
            load_config(self._write("menubar: [unclosed\n"))

    def test_missing_file_raises_os_error(self):
        with self.assertRaises(OSError):
            load_config(Path("/nonexistent/boxer.yaml"))


class ParseConfigTests(unittest.TestCase):
    def test_numeric_durations_are_seconds(self):
        config = parse_config({"menubar": {"step": 90, "interval": "900"}})
        self.assertEqual(config.menubar.step, timedelta(seconds=90))
        self.assertEqual(config.menubar.interval, timedelta(seconds=900))

    def test_fractional_duration(self):
        config = parse_config({"announcement": {"step": "0.5h"}})
        self.assertEqual(config.announcement.step, timedelta(minutes=30))

    def test_compound_and_sub_second_durations(self):
        cases = {
            "500ms": timedelta(milliseconds=500),
            "1h30m": timedelta(hours=1, minutes=30),
            "1m30s": timedelta(seconds=90),
            "250us": timedelta(microseconds=250),
            "2d": timedelta(days=2),
            "1.5s": timedelta(seconds=1.5),
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                config = parse_config({"ticker": {"tick_interval": text}})
                self.assertEqual(config.ticker.tick_interval, expected)

    def test_invalid_values(self):
        cases = [
            {"wallpaper": {"foreground": "#12345"}},
            {"wallpaper": {"background": "blue"}},
            {"menubar": {"step": "abc"}},
            {"menubar": {"step": True}},
            {"menubar": ["enabled"]},
            {"telegram": {"chat_ids": [1]}},
            {"telegram": {"bot_token": "x", "chat_ids": ["abc"]}},
            {"telegram": {"bot_token": "x", "request_timeout": "x"}},
            {"menubar": {"step": 10**400}},
            {"menubar": {"step": 1e300}},
            {"menubar": {"interval": "99999999999999999999999h"}},
            {"menubar": {"step": "1h30"}},
            {"wallpaper": {"foreground": [256, 0, 0]}},
        ]
        for raw in cases:
            with self.subTest(raw=raw):
                with self.assertRaises(ConfigurationError):
                    parse_config(raw)


if __name__ == "__main__":
    unittest.main()
