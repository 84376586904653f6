"""Command-line entry point for the damage calculator."""
import argparse
import sys
from typing import Optional

from .calculator.app import CalculatorApp
from .core.calc_enums import FIELD_ORDER
from .core.config_loader import CalculatorConfigLoader
from .core.renderer import Renderer, RendererConfig
from .renderers.simple_renderer import SimpleRenderer
from .renderers.terminal_renderer import TerminalRenderer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gloomcalc",
        description="Gloomhaven damage calculator (Shield and Pierce)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gloomcalc                                   # Show the default calculation
  gloomcalc --hp 12 --shield 3 --attack 5     # One-shot calculation
  gloomcalc --interactive                     # Edit values at a prompt
  gloomcalc --renderer simple --no-color      # Plain ASCII output
        """
    )

    for stat_field in FIELD_ORDER:
        parser.add_argument(
            f"--{stat_field.value}",
            metavar="VALUE",
            help=f"{stat_field.label} value (free text; corrected to a non-negative integer)"
        )

    parser.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Read commands from standard input until quit"
    )
    parser.add_argument(
        "--renderer",
        choices=["terminal", "simple"],
        default="terminal",
        help="Output style (default: terminal)"
    )
    parser.add_argument(
        "--config",
        help="Path to a calculator YAML configuration file"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show debug messages in the log panel"
    )
    return parser


def create_renderer(name: str, config: RendererConfig) -> Renderer:
    if name == "simple":
        return SimpleRenderer(config)
    return TerminalRenderer(config)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    loader = CalculatorConfigLoader(args.config)
    config = loader.load_config()

    renderer_config = RendererConfig(use_color=not args.no_color, show_log=args.interactive or args.debug)
    renderer = create_renderer(args.renderer, renderer_config)

    app = CalculatorApp(renderer, config=config, config_error=loader.last_error, debug=args.debug)

    edits = {f: getattr(args, f.value) for f in FIELD_ORDER if getattr(args, f.value) is not None}
    if edits:
        app.session.edit_many(edits)

    try:
        if args.interactive:
            app.run()
        else:
            app.run_once()
    finally:
        app.shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
