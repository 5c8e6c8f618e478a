"""Sprite layout: offsets, background positions and selectors per image."""

from __future__ import annotations

import re
from typing import Callable, Hashable, Iterator, Optional, Sequence

from . import ArrangeBy, BuildMethod, ImageGeometry, LayoutSettings, PositionedImage
from .errors import CollaboratorError, ConfigurationError
from ..utils import validators

PlaceAt = Callable[[Hashable, int, int], None]
Offsets = Iterator[tuple[int, int]]

_WHITESPACE = re.compile(r"\s+")


def format_offset(value: int) -> str:
    """Render one axis of a background position; zero carries no unit."""

    if value == 0:
        return "0"
    return f"{-value}px"


def background_position(x: int, y: int) -> str:
    return f"{format_offset(x)} {format_offset(y)}"


def build_selector(settings: LayoutSettings, name: str) -> str:
    sanitized = _WHITESPACE.sub("", name)
    return f"{settings.selector_prefix}.{settings.class_prefix}{sanitized}{settings.selector_suffix}"


def _horizontal_offsets(settings: LayoutSettings, geometries: Sequence[ImageGeometry]) -> Offsets:
    memo = 0
    for geometry in geometries:
        yield memo, 0
        memo += geometry.width + settings.offset_spacing


def _vertical_offsets(settings: LayoutSettings, geometries: Sequence[ImageGeometry]) -> Offsets:
    memo = 0
    for geometry in geometries:
        yield 0, memo
        memo += geometry.height + settings.offset_spacing


def _tiled_offsets(settings: LayoutSettings, geometries: Sequence[ImageGeometry]) -> Offsets:
    if not geometries:
        return
    max_width = max(geometry.width for geometry in geometries)
    max_height = max(geometry.height for geometry in geometries)
    cell_width = max_width + settings.horizontal_spacing
    cell_height = max_height + settings.vertical_spacing
    row_nums = settings.row_nums
    by_rows = validators.parse_arrange_by(settings.arrange_by) is ArrangeBy.ROWS

    x = y = 0
    for index in range(len(geometries)):
        yield x, y
        wraps = index % row_nums == row_nums - 1
        if by_rows:
            if wraps:
                x = 0
                y += cell_height
            else:
                x += cell_width
        else:
            if wraps:
                y = 0
                x += cell_width
            else:
                y += cell_height


_STRATEGIES: dict[BuildMethod, Callable[[LayoutSettings, Sequence[ImageGeometry]], Offsets]] = {
    BuildMethod.HORIZONTAL: _horizontal_offsets,
    BuildMethod.VERTICAL: _vertical_offsets,
    BuildMethod.TILED: _tiled_offsets,
}


def compute_layout(settings: LayoutSettings, geometries: Sequence[ImageGeometry]) -> list[PositionedImage]:
    """Return one positioned record per geometry, in input order.

    Raises ConfigurationError for unknown build methods, invalid spacing or
    row counts, and images without a positive size.
    """

    validators.validate_layout_settings(settings)
    validators.validate_geometries(geometries)
    strategy = _STRATEGIES.get(validators.parse_build_method(settings.build_method))
    if strategy is None:
        raise ConfigurationError(f"No layout strategy for build method {settings.build_method!r}")

    records = []
    for geometry, (x, y) in zip(geometries, strategy(settings, geometries)):
        records.append(
            PositionedImage(
                id=geometry.id,
                selector=build_selector(settings, geometry.display_name),
                width=f"{geometry.width}px",
                height=f"{geometry.height}px",
                background_position=background_position(x, y),
                offset_x=x,
                offset_y=y,
            )
        )
    return records


def place_layout(records: Sequence[PositionedImage], place_at: PlaceAt) -> None:
    """Move each image to its computed offset, first to last."""

    for record in records:
        try:
            place_at(record.id, record.offset_x, record.offset_y)
        except CollaboratorError:
            raise
        except (OSError, RuntimeError) as exc:
            raise CollaboratorError("placement", f"Could not place {record.id!r}: {exc}") from exc


def layout_sprite(
    settings: LayoutSettings,
    geometries: Sequence[ImageGeometry],
    place_at: Optional[PlaceAt] = None,
) -> list[PositionedImage]:
    """Compute the full layout, then apply placements if a callback is given."""

    records = compute_layout(settings, geometries)
    if place_at is not None:
        place_layout(records, place_at)
    return records
