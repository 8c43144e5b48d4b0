"""CLI entrypoints for tintgrid demos, test patterns and diagnostics."""

from __future__ import annotations

import argparse
import json

from tintgrid_core import RenderLoop, build_doctor_payload, create_terminal, load_config
from tintgrid_core.logging_setup import configure_logging
from tintgrid_renderer import PATTERNS, Color24, ColorMode, blit_image, build_test_pattern

from .scenes import SCENES, scene


MODE_CHOICES = [mode.value for mode in ColorMode]


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _apply_overrides(cfg, args: argparse.Namespace):
    if getattr(args, "mode", None):
        cfg.render.color_mode = args.mode
    if getattr(args, "width", None):
        cfg.render.width = args.width
    if getattr(args, "height", None):
        cfg.render.height = args.height
    if getattr(args, "no_console_api", False):
        cfg.render.prefer_console_api = False
    return cfg


def cmd_hello(args: argparse.Namespace) -> int:
    cfg = _apply_overrides(load_config(), args)
    terminal = create_terminal(cfg)
    terminal.foreground_color = Color24.named("turquoise")
    terminal.write_line("Hello, world!")
    terminal.foreground_color = Color24.named("rosybrown")
    terminal.write_line(f"{terminal.color_mode.value} via {terminal.backend_name}")
    terminal.flush()
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    cfg = _apply_overrides(load_config(), args)
    terminal = create_terminal(cfg)
    loop = RenderLoop(terminal, scene(args.scene), fps=args.fps)
    status = loop.run(args.frames)
    if args.stats:
        _print_json(
            {
                "scene": args.scene,
                "mode": terminal.color_mode.value,
                "backend": terminal.backend_name,
                "frames": status.frames,
                "fps": status.fps,
                "last_flush": status.last_flush,
            }
        )
    return 0


def cmd_pattern(args: argparse.Namespace) -> int:
    cfg = _apply_overrides(load_config(), args)
    terminal = create_terminal(cfg)
    image = build_test_pattern(args.pattern, width=terminal.width, height=terminal.height)
    blit_image(terminal, image)
    terminal.flush()
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config()))
    return 0


def _add_render_options(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--mode", choices=MODE_CHOICES, default=None, help="Color mode, overrides TINTGRID_COLOR_MODE")
    cmd.add_argument("--width", type=int, default=None)
    cmd.add_argument("--height", type=int, default=None)
    cmd.add_argument("--no-console-api", action="store_true", help="Always render escape sequences")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tintgrid", description="tintgrid terminal color demos and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    hello_cmd = sub.add_parser("hello", help="Write a short colored greeting")
    _add_render_options(hello_cmd)
    hello_cmd.set_defaults(func=cmd_hello)

    demo_cmd = sub.add_parser("demo", help="Animate a demo scene")
    demo_cmd.add_argument("--scene", default="color-space", choices=list(SCENES))
    demo_cmd.add_argument("--frames", type=int, default=300)
    demo_cmd.add_argument("--fps", type=float, default=30.0)
    demo_cmd.add_argument("--stats", action="store_true", help="Print frame statistics when done")
    _add_render_options(demo_cmd)
    demo_cmd.set_defaults(func=cmd_demo)

    pat_cmd = sub.add_parser("pattern", help="Paint a deterministic test pattern")
    pat_cmd.add_argument("--pattern", default="hsv-plane", choices=list(PATTERNS))
    _add_render_options(pat_cmd)
    pat_cmd.set_defaults(func=cmd_pattern)

    doctor_cmd = sub.add_parser("doctor", help="Print platform and backend diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(level=cfg.logging.level, json_output=cfg.logging.json, log_file=cfg.logging.log_file)
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
