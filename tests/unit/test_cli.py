import contextlib
import io
import json
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "demo"))
sys.path.insert(0, str(ROOT / "packages" / "console"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from tintgrid_app import scenes
from tintgrid_app.cli import build_parser, cmd_doctor
from tintgrid_renderer import ColorMode, Terminal


class CliTests(unittest.TestCase):
    def test_demo_command(self):
        args = build_parser().parse_args(["demo", "--scene", "bounce", "--frames", "5", "--mode", "plain8"])
        self.assertEqual(args.command, "demo")
        self.assertEqual(args.scene, "bounce")
        self.assertEqual(args.frames, 5)
        self.assertEqual(args.mode, "plain8")

    def test_pattern_command(self):
        args = build_parser().parse_args(["pattern", "--pattern", "quadrants", "--no-console-api"])
        self.assertEqual(args.command, "pattern")
        self.assertEqual(args.pattern, "quadrants")
        self.assertTrue(args.no_console_api)

    def test_unknown_mode_rejected(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_parser().parse_args(["hello", "--mode", "sepia"])

    def test_doctor_prints_json(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            rc = cmd_doctor(build_parser().parse_args(["doctor"]))
        self.assertEqual(rc, 0)
        self.assertIn("backends", json.loads(out.getvalue()))


class SceneTests(unittest.TestCase):
    def test_scenes_draw_without_errors(self):
        for name in scenes.SCENES:
            term = Terminal(12, 6, ColorMode.PLAIN_8BIT, out=io.StringIO(), prefer_console_api=False)
            paint = scenes.scene(name)
            for frame in (0, 1, 37):
                paint(term, frame)
            term.flush()

    def test_bounce_stays_inside(self):
        self.assertEqual(scenes._bounce_position(0, 5), 0)
        self.assertEqual(scenes._bounce_position(5, 5), 5)
        self.assertEqual(scenes._bounce_position(7, 5), 3)
        self.assertEqual(scenes._bounce_position(3, 0), 0)

    def test_unknown_scene(self):
        with self.assertRaises(ValueError):
            scenes.scene("spiral")


if __name__ == "__main__":
    unittest.main()
