"""Core data model for sprite layout and stylesheet generation."""

__all__ = [
    "BuildMethod",
    "ArrangeBy",
    "CSSFormat",
    "ImageGeometry",
    "LayoutSettings",
    "PositionedImage",
    "SourceImage",
    "BuildSettings",
    "BuildResult",
    "BuildOutcome",
]

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Hashable, Optional


class BuildMethod(str, Enum):
    """Packing strategy for the composite image."""

    HORIZONTAL = "Horizontal"
    VERTICAL = "Vertical"
    TILED = "Tiled"


class ArrangeBy(str, Enum):
    """Wraparound order used by the tiled strategy."""

    ROWS = "Rows"
    COLUMNS = "Columns"


class CSSFormat(str, Enum):
    """Block layout of the generated stylesheet."""

    EXPANDED = "Expanded"
    COMPACT = "Compact"


@dataclass(frozen=True)
class ImageGeometry:
    """Known size of one source image."""

    id: Hashable
    width: int
    height: int
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name if self.name is not None else str(self.id)


@dataclass(frozen=True)
class LayoutSettings:
    """Layout and style options shared by every build."""

    build_method: BuildMethod = BuildMethod.HORIZONTAL
    offset_spacing: int = 0
    arrange_by: ArrangeBy = ArrangeBy.ROWS
    row_nums: int = 1
    horizontal_spacing: int = 0
    vertical_spacing: int = 0
    selector_prefix: str = ""
    class_prefix: str = "sp-"
    selector_suffix: str = ""
    include_width_height: bool = True
    css_format: CSSFormat = CSSFormat.EXPANDED
    export_css_file: bool = True


@dataclass(frozen=True)
class PositionedImage:
    """Placement and CSS values computed for one image."""

    id: Hashable
    selector: str
    width: str
    height: str
    background_position: str
    offset_x: int
    offset_y: int

    def as_css_info(self) -> dict[str, str]:
        return {
            "selector": self.selector,
            "width": self.width,
            "height": self.height,
            "background-position": self.background_position,
        }


@dataclass(frozen=True)
class SourceImage:
    """An image file selected for the sprite."""

    path: Path


@dataclass
class BuildSettings:
    """Everything a settings provider hands to the build orchestrator."""

    source_images: list[SourceImage]
    output_folder: Path
    layout: LayoutSettings = field(default_factory=LayoutSettings)
    export_sprite_image: bool = True
    close_generated_document: bool = True
    open_output_folder: bool = False
    sprite_name: str = "sprite"


@dataclass
class BuildResult:
    """Layout records and the settings the stylesheet step needs."""

    css_info: list[PositionedImage]
    export_css_file: bool
    output_folder: Path
    css_format: CSSFormat
    include_width_height: bool
    sprite_path: Optional[Path] = None
    sprite_size: Optional[tuple[int, int]] = None
    sprite_name: str = "sprite"

    def to_dict(self) -> dict[str, Any]:
        """Plain projection for callers that persist or display the result."""

        return {
            "cssInfo": [record.as_css_info() for record in self.css_info],
            "exportCSSFile": self.export_css_file,
            "outputFolder": str(self.output_folder),
            "cssFormat": CSSFormat(self.css_format).value,
            "includeWidthHeight": self.include_width_height,
        }


@dataclass
class BuildOutcome:
    """Files produced by a complete build."""

    result: BuildResult
    css_path: Optional[Path]

    @property
    def sprite_path(self) -> Optional[Path]:
        return self.result.sprite_path
