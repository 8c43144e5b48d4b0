import io
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "console"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from tintgrid_core.config import load_config
from tintgrid_core.factory import create_terminal
from tintgrid_core.render_loop import RenderLoop
from tintgrid_renderer import ColorMode, DitherMapping, Terminal


class FactoryTests(unittest.TestCase):
    def test_terminal_from_config(self):
        cfg = load_config(
            {
                "TINTGRID_COLOR_MODE": "plain8",
                "TINTGRID_WIDTH": "12",
                "TINTGRID_HEIGHT": "3",
                "TINTGRID_CHECKED": "false",
            }
        )
        term = create_terminal(cfg, out=io.StringIO())
        self.assertEqual((term.width, term.height), (12, 3))
        self.assertEqual(term.color_mode, ColorMode.PLAIN_8BIT)
        self.assertFalse(term.checked)

    def test_eager_dither(self):
        cfg = load_config(
            {
                "TINTGRID_COLOR_MODE": "dither4",
                "TINTGRID_WIDTH": "4",
                "TINTGRID_HEIGHT": "2",
                "TINTGRID_CONSOLE_API": "0",
                "TINTGRID_DITHER_RESOLUTION": "3",
                "TINTGRID_DITHER_EAGER": "1",
            }
        )
        term = create_terminal(cfg, out=io.StringIO(), dither=DitherMapping())
        self.assertTrue(term.dither.is_computed)
        self.assertEqual(term.dither.resolution, 3)


class RenderLoopTests(unittest.TestCase):
    def test_run_draws_and_flushes_each_frame(self):
        out = io.StringIO()
        term = Terminal(3, 1, ColorMode.PLAIN_24BIT, out=out, prefer_console_api=False)
        seen = []

        def draw(terminal, frame):
            seen.append(frame)
            terminal.clear()
            terminal.write(str(frame))

        loop = RenderLoop(term, draw)
        status = loop.run(3)
        self.assertEqual(seen, [0, 1, 2])
        self.assertEqual(status.frames, 3)
        self.assertEqual(status.last_flush.cells, 3)
        self.assertIsNone(status.last_error)
        self.assertEqual(out.getvalue().count("\x1b[0m"), 3)

    def test_prepare_precomputes_in_dither_mode(self):
        term = Terminal(
            2, 1, ColorMode.DITHER_4BIT, out=io.StringIO(), prefer_console_api=False,
            dither=DitherMapping(), dither_resolution=2,
        )
        RenderLoop(term, lambda t, i: None).prepare()
        self.assertTrue(term.dither.is_computed)

    def test_draw_errors_propagate(self):
        term = Terminal(2, 1, ColorMode.PLAIN_24BIT, out=io.StringIO(), prefer_console_api=False)

        def draw(terminal, frame):
            terminal.set_cursor_position(5, 0)

        loop = RenderLoop(term, draw)
        with self.assertRaises(IndexError):
            loop.render_frame()
        self.assertEqual(loop.status.frames, 0)
        self.assertIsNotNone(loop.status.last_error)


if __name__ == "__main__":
    unittest.main()
