import io
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "console"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from tintgrid_renderer.buffers import AnsiFrameBuffer
from tintgrid_renderer.colors import RGB, Color4, Color8, Color24, ConsoleColor
from tintgrid_renderer.console_buffer import ConsoleFrameBuffer
from tintgrid_renderer.dither import DitherMapping
from tintgrid_renderer.errors import BoundsError, DimensionError
from tintgrid_renderer.terminal import BLOCK_PROBE, ColorMode, Terminal, create_buffer, uses_console_api

BLACK = Color4(ConsoleColor.BLACK)
WHITE = Color4(ConsoleColor.WHITE)
RED = Color4(ConsoleColor.RED)


class FakeTransport:
    def __init__(self) -> None:
        self.writes = []
        self.closed = 0

    def write_region(self, region) -> int:
        self.writes.append(region)
        return len(region.records)

    def close(self) -> None:
        self.closed += 1


def make_terminal(width=10, height=4, mode=ColorMode.PLAIN_24BIT, **kwargs):
    kwargs.setdefault("out", io.StringIO())
    kwargs.setdefault("prefer_console_api", False)
    return Terminal(width, height, mode, **kwargs)


class TerminalSizeTests(unittest.TestCase):
    def test_sizes(self):
        for width, height in ((13, 20), (22, 15), (1, 1), (1, 200), (200, 1)):
            term = make_terminal(width, height)
            self.assertEqual(term.width, width)
            self.assertEqual(term.height, height)

    def test_nonpositive_sizes(self):
        for width, height in ((-13, 20), (22, -15), (0, 0), (0, 200), (200, 0)):
            with self.assertRaises(DimensionError):
                make_terminal(width, height)


class WriteProtocolTests(unittest.TestCase):
    def test_full_wrap_plus_one(self):
        term = make_terminal(5, 3)
        term.write("x" * (5 * 3 + 1))
        self.assertEqual((term.cursor_left, term.cursor_top), (1, 0))

    def test_line_wrap(self):
        term = make_terminal(4, 3)
        term.write("abcde")
        self.assertEqual(term.buffer.get_char(0, 1), "e")
        self.assertEqual((term.cursor_left, term.cursor_top), (1, 1))

    def test_carriage_return_and_newline(self):
        term = make_terminal(6, 3)
        term.write("abc\rX")
        self.assertEqual(term.buffer.get_char(0, 0), "X")
        self.assertEqual(term.cursor_left, 1)
        term.write_line("y")
        self.assertEqual((term.cursor_left, term.cursor_top), (0, 1))

    def test_tab_pads_to_next_stop(self):
        term = make_terminal(10, 2)
        term.write("\t")
        self.assertEqual(term.cursor_left, 4)
        term.write("ab\t")
        self.assertEqual(term.cursor_left, 8)
        term.set_cursor_position(3, 0)
        term.write("\t")
        self.assertEqual(term.cursor_left, 4)

    def test_other_control_characters_print_question_mark(self):
        term = make_terminal()
        term.write("\x07\x1b")
        self.assertEqual(term.buffer.get_char(0, 0), "?")
        self.assertEqual(term.buffer.get_char(1, 0), "?")

    def test_write_uses_current_colors(self):
        term = make_terminal(mode=ColorMode.PLAIN_4BIT)
        term.foreground_color = RGB(1, 0, 0)
        term.background_color = Color24(255, 255, 255)
        term.write("x")
        cell = term.buffer.cell(0, 0)
        self.assertEqual(cell.foreground, RED)
        self.assertEqual(cell.background, WHITE)

    def test_write_returns_length(self):
        self.assertEqual(make_terminal().write("hello"), 5)


class CursorAndColorTests(unittest.TestCase):
    def test_cursor_bounds_checked(self):
        term = make_terminal(5, 3)
        with self.assertRaises(BoundsError):
            term.cursor_left = 5
        with self.assertRaises(BoundsError):
            term.set_cursor_position(0, -1)

    def test_cursor_clamped_when_unchecked(self):
        term = make_terminal(5, 3, checked=False)
        term.set_cursor_position(9, -2)
        self.assertEqual((term.cursor_left, term.cursor_top), (4, 0))

    def test_reset_color(self):
        term = make_terminal()
        term.foreground_color = Color24(1, 2, 3)
        term.reset_color()
        self.assertEqual(term.foreground_color, Color4(ConsoleColor.GRAY))
        self.assertEqual(term.background_color, BLACK)

    def test_none_color_rejected(self):
        term = make_terminal()
        with self.assertRaises(TypeError):
            term.foreground_color = None


class DitherModeTests(unittest.TestCase):
    def make(self):
        return make_terminal(4, 2, ColorMode.DITHER_4BIT, dither=DitherMapping(), dither_resolution=2)

    def test_blank_probe_uses_background(self):
        term = self.make()
        term.background_color = RGB(1, 1, 1)
        term.write(" ")
        self.assertTrue(term.dither.is_computed)
        cell = term.buffer.cell(0, 0)
        self.assertEqual(cell.character, " ")
        self.assertEqual(cell.background, WHITE)

    def test_block_probe_uses_foreground(self):
        term = self.make()
        term.foreground_color = RGB(1, 0, 0)
        term.write(BLOCK_PROBE)
        cell = term.buffer.cell(0, 0)
        self.assertEqual(cell.character, " ")
        self.assertEqual(cell.foreground, BLACK)
        self.assertEqual(cell.background, RED)

    def test_other_glyphs_pass_through(self):
        term = self.make()
        term.foreground_color = RGB(1, 0, 0)
        term.write("A")
        self.assertFalse(term.dither.is_computed)
        cell = term.buffer.cell(0, 0)
        self.assertEqual(cell.character, "A")
        self.assertEqual(cell.foreground, RED)

    def test_precompute_is_idempotent_on_terminal(self):
        term = self.make()
        term.precompute_dither()
        term.precompute_dither()
        self.assertEqual(term.dither.resolution, 2)


class ModeAndFlushTests(unittest.TestCase):
    def test_mode_switch_discards_content(self):
        term = make_terminal()
        term.write("A")
        term.color_mode = ColorMode.PLAIN_8BIT
        self.assertEqual(term.color_mode, ColorMode.PLAIN_8BIT)
        self.assertEqual(term.buffer.get_char(0, 0), " ")
        self.assertIs(term.buffer.color_type, Color8)
        self.assertEqual((term.width, term.height), (10, 4))

    def test_plain_modes_use_escape_backend(self):
        buf = create_buffer(3, 3, ColorMode.PLAIN_24BIT, console_transport=FakeTransport())
        self.assertIsInstance(buf, AnsiFrameBuffer)
        self.assertIs(buf.color_type, Color24)

    def test_console_backend_with_transport(self):
        transport = FakeTransport()
        term = Terminal(3, 2, ColorMode.PLAIN_4BIT, out=io.StringIO(), console_transport=transport)
        self.assertIsInstance(term.buffer, ConsoleFrameBuffer)
        self.assertEqual(term.backend_name, "console")
        term.write("hi")
        stats = term.flush(offset_x=1, offset_y=1)
        self.assertEqual(len(transport.writes), 1)
        self.assertEqual(stats.cells, 6)
        self.assertEqual(term.out.getvalue(), "")

    def test_mode_switch_closes_previous_buffer(self):
        transport = FakeTransport()
        term = Terminal(3, 2, ColorMode.PLAIN_4BIT, out=io.StringIO(), console_transport=transport)
        term.flush()
        term.color_mode = ColorMode.PLAIN_24BIT
        self.assertEqual(transport.closed, 1)
        self.assertIsInstance(term.buffer, AnsiFrameBuffer)

    def test_close_releases_console_transport(self):
        transport = FakeTransport()
        term = Terminal(3, 2, ColorMode.DITHER_4BIT, out=io.StringIO(), console_transport=transport)
        term.close()
        self.assertEqual(transport.closed, 1)

    def test_backend_selection_rule(self):
        transport = FakeTransport()
        self.assertTrue(uses_console_api(ColorMode.PLAIN_4BIT, True, transport))
        self.assertTrue(uses_console_api(ColorMode.DITHER_4BIT, True, transport))
        self.assertFalse(uses_console_api(ColorMode.PLAIN_4BIT, False, transport))
        self.assertFalse(uses_console_api(ColorMode.PLAIN_8BIT, True, transport))
        self.assertFalse(uses_console_api(ColorMode.PLAIN_24BIT, True, transport))

    def test_flush_writes_to_out(self):
        out = io.StringIO()
        term = make_terminal(2, 1, out=out)
        term.write("ok")
        stats = term.flush()
        self.assertIn("ok", out.getvalue())
        self.assertEqual(stats.chars_written, len(out.getvalue()))

    def test_flush_explicit_output(self):
        term = make_terminal(2, 1)
        other = io.StringIO()
        term.flush(other)
        self.assertTrue(other.getvalue().endswith("\x1b[0m"))
        self.assertEqual(term.out.getvalue(), "")

    def test_flush_without_target(self):
        term = make_terminal(2, 1)
        term.out = None
        self.assertIsNone(term.flush())

    def test_clear_homes_cursor(self):
        term = make_terminal()
        term.write("abc")
        term.clear()
        self.assertEqual((term.cursor_left, term.cursor_top), (0, 0))
        self.assertEqual(term.buffer.get_char(1, 0), " ")

    def test_clear_with_fill_keeps_cursor(self):
        term = make_terminal(mode=ColorMode.PLAIN_4BIT)
        term.write("abc")
        term.clear("#", RED, WHITE)
        self.assertEqual(term.cursor_left, 3)
        self.assertEqual(term.buffer.cell(0, 0).background, WHITE)


if __name__ == "__main__":
    unittest.main()
