"""Validation helpers for user inputs."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, TypeVar

from ..core import ArrangeBy, BuildMethod, BuildSettings, CSSFormat, ImageGeometry, LayoutSettings
from ..core.errors import ConfigurationError


ALLOWED_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"}

E = TypeVar("E", bound=Enum)


def parse_choice(enum_cls: type[E], value: object, field: str) -> E:
    """Resolve a member of ``enum_cls`` from a member or a case-insensitive value."""

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == wanted or member.name.lower() == wanted:
                return member
    choices = ", ".join(member.value for member in enum_cls)
    raise ConfigurationError(f"{field} must be one of {choices} (got {value!r})")


def parse_build_method(value: object) -> BuildMethod:
    return parse_choice(BuildMethod, value, "Build method")


def parse_arrange_by(value: object) -> ArrangeBy:
    return parse_choice(ArrangeBy, value, "Arrange by")


def parse_css_format(value: object) -> CSSFormat:
    return parse_choice(CSSFormat, value, "CSS format")


def parse_optional_non_negative_int(value: str | None, field: str) -> Optional[int]:
    """Parse a non-negative integer (0 allowed) from a string value."""

    if value is None or value == "":
        return None
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{field} must be an integer") from exc
    if parsed < 0:
        raise ConfigurationError(f"{field} must be zero or greater")
    return parsed


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_non_negative(value: object, field: str) -> None:
    if not _is_int(value) or value < 0:
        raise ConfigurationError(f"{field} must be an integer of zero or greater")


def validate_layout_settings(settings: LayoutSettings) -> None:
    """Reject settings the layout engine or renderer cannot honour."""

    build_method = parse_build_method(settings.build_method)
    parse_arrange_by(settings.arrange_by)
    parse_css_format(settings.css_format)

    validate_non_negative(settings.offset_spacing, "Offset spacing")
    validate_non_negative(settings.horizontal_spacing, "Horizontal spacing")
    validate_non_negative(settings.vertical_spacing, "Vertical spacing")

    if build_method is BuildMethod.TILED:
        if not _is_int(settings.row_nums) or settings.row_nums <= 0:
            raise ConfigurationError("Row count must be greater than zero for tiled sprites")

    for field, value in (
        ("Selector prefix", settings.selector_prefix),
        ("Class prefix", settings.class_prefix),
        ("Selector suffix", settings.selector_suffix),
    ):
        if not isinstance(value, str):
            raise ConfigurationError(f"{field} must be text")


def validate_geometries(geometries: Iterable[ImageGeometry]) -> None:
    """Ensure every image has a positive integer size."""

    for geometry in geometries:
        for field, value in (("width", geometry.width), ("height", geometry.height)):
            if not _is_int(value) or value <= 0:
                raise ConfigurationError(
                    f"Image {geometry.display_name!r} has invalid {field} {value!r}; must be greater than zero"
                )


def validate_image_path(path: Path) -> Path:
    """Ensure an image path has a supported extension."""

    if not path:
        raise ConfigurationError("No image path provided")
    if Path(path).suffix.lower() not in ALLOWED_IMAGE_EXTENSIONS:
        raise ConfigurationError(f"Unsupported image format: {path}")
    return Path(path)


def validate_build_settings(settings: BuildSettings) -> None:
    """Check a full build request before anything is created."""

    validate_layout_settings(settings.layout)
    if not settings.source_images:
        raise ConfigurationError("Select at least one source image")
    for source in settings.source_images:
        validate_image_path(source.path)
    if not settings.output_folder:
        raise ConfigurationError("Output folder is required")
    if not settings.sprite_name or not settings.sprite_name.strip():
        raise ConfigurationError("Sprite name must not be empty")
