"""Stylesheet text generation from positioned images."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from . import BuildResult, CSSFormat, PositionedImage
from ..utils import file_tools, validators

logger = logging.getLogger(__name__)

SaveTextFile = Callable[..., Path]


def _expanded_template(include_width_height: bool) -> str:
    template = "{selector} {{\n"
    if include_width_height:
        template += "\twidth: {width};\n\theight: {height};\n"
    template += "\tbackground-position: {background_position};\n"
    return template + "}}\n"


def _compact_template(include_width_height: bool) -> str:
    template = "{selector} {{"
    if include_width_height:
        template += " width: {width}; height: {height};"
    return template + " background-position: {background_position}; }}"


_TEMPLATES = {
    CSSFormat.EXPANDED: _expanded_template,
    CSSFormat.COMPACT: _compact_template,
}


def css_template(css_format: CSSFormat | str, include_width_height: bool) -> str:
    """Return the block template for a format, with named ``str.format`` fields."""

    return _TEMPLATES[validators.parse_css_format(css_format)](include_width_height)


def render_block(template: str, record: PositionedImage) -> str:
    # Values are substituted once and never parsed as template text.
    return template.format(
        selector=record.selector,
        width=record.width,
        height=record.height,
        background_position=record.background_position,
    )


def render_stylesheet(
    records: Iterable[PositionedImage],
    css_format: CSSFormat | str = CSSFormat.EXPANDED,
    include_width_height: bool = True,
) -> str:
    template = css_template(css_format, include_width_height)
    return "\n".join(render_block(template, record) for record in records)


def build_css(
    result: BuildResult,
    save_text_file: SaveTextFile = file_tools.save_text_file,
) -> Optional[Path]:
    """Render and persist the stylesheet for a build, unless disabled."""

    if not result.export_css_file:
        logger.debug("Stylesheet export disabled; skipping")
        return None

    contents = render_stylesheet(result.css_info, result.css_format, result.include_width_height)
    return save_text_file(contents, result.output_folder, f"{result.sprite_name}.css")
