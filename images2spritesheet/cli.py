"""Command-line entry point for image-to-sprite workflows."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .core import BuildMethod, ArrangeBy, BuildSettings, CSSFormat, LayoutSettings, SourceImage
from .core import sprite_builder, stylesheet_renderer
from .core.errors import CollaboratorError, ConfigurationError
from .utils import validators

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def _non_negative(field: str):
    def parse(value: str) -> int:
        try:
            return validators.parse_optional_non_negative_int(value, field) or 0
        except ConfigurationError as exc:
            raise argparse.ArgumentTypeError(str(exc)) from exc

    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="images2spritesheet",
        description="Combine images into a sprite and generate matching CSS background-position rules.",
    )
    parser.add_argument("images", type=Path, nargs="+", help="Source images, in sprite order")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output folder for sprite and CSS")
    parser.add_argument(
        "--build-method",
        default=BuildMethod.HORIZONTAL.value,
        help="Horizontal, Vertical or Tiled (default: Horizontal)",
    )
    parser.add_argument(
        "--offset-spacing",
        type=_non_negative("Offset spacing"),
        default=0,
        help="Gap between images for horizontal/vertical sprites (px)",
    )
    parser.add_argument("--arrange-by", default=ArrangeBy.ROWS.value, help="Rows or Columns (tiled only)")
    parser.add_argument(
        "--row-nums",
        type=int,
        default=1,
        help="Images per row (Rows) or per column (Columns) for tiled sprites",
    )
    parser.add_argument("--horizontal-spacing", type=_non_negative("Horizontal spacing"), default=0)
    parser.add_argument("--vertical-spacing", type=_non_negative("Vertical spacing"), default=0)
    parser.add_argument("--selector-prefix", default="", help="Text placed before each class selector")
    parser.add_argument("--class-prefix", default="sp-", help="Prefix of generated class names (default: sp-)")
    parser.add_argument("--selector-suffix", default="", help="Text placed after each class selector")
    parser.add_argument(
        "--no-width-height",
        action="store_true",
        help="Omit width/height declarations from the stylesheet",
    )
    parser.add_argument(
        "--css-format",
        default=CSSFormat.EXPANDED.value,
        help="Expanded or Compact (default: Expanded)",
    )
    parser.add_argument("--no-css", action="store_true", help="Do not write a stylesheet")
    parser.add_argument("--no-sprite", action="store_true", help="Do not export the sprite PNG")
    parser.add_argument("--keep-open", action="store_true", help="Keep the generated document open")
    parser.add_argument("--open-folder", action="store_true", help="Open the output folder when done")
    parser.add_argument("--sprite-name", default="sprite", help="File stem for sprite.png / sprite.css")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the stylesheet without writing any files",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> BuildSettings:
    layout = LayoutSettings(
        build_method=validators.parse_build_method(args.build_method),
        offset_spacing=args.offset_spacing,
        arrange_by=validators.parse_arrange_by(args.arrange_by),
        row_nums=args.row_nums,
        horizontal_spacing=args.horizontal_spacing,
        vertical_spacing=args.vertical_spacing,
        selector_prefix=args.selector_prefix,
        class_prefix=args.class_prefix,
        selector_suffix=args.selector_suffix,
        include_width_height=not args.no_width_height,
        css_format=validators.parse_css_format(args.css_format),
        export_css_file=not args.no_css and not args.dry_run,
    )
    return BuildSettings(
        source_images=[SourceImage(path) for path in args.images],
        output_folder=args.output,
        layout=layout,
        export_sprite_image=not args.no_sprite and not args.dry_run,
        close_generated_document=not args.keep_open,
        open_output_folder=args.open_folder and not args.dry_run,
        sprite_name=args.sprite_name,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = settings_from_args(args)
        if args.dry_run:
            result = sprite_builder.build_sprite(settings)
            if args.no_css:
                logger.info("Stylesheet disabled; laid out %s images", len(result.css_info))
                return 0
            print(
                stylesheet_renderer.render_stylesheet(
                    result.css_info, result.css_format, result.include_width_height
                )
            )
            return 0
        outcome = sprite_builder.build(settings)
    except ConfigurationError as exc:
        logger.error("Invalid settings: %s", exc)
        return 2
    except CollaboratorError as exc:
        logger.error("Build failed during %s: %s", exc.operation, exc.reason)
        return 1

    if outcome.sprite_path:
        print(outcome.sprite_path)
    if outcome.css_path:
        print(outcome.css_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
