"""Headless layered document built on Pillow."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from PIL import Image, UnidentifiedImageError

from .errors import CollaboratorError
from ..utils import file_tools

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class TrimType(str, Enum):
    TRANSPARENT = "transparent"


class Layer:
    """A bitmap placed on a document at an integer offset."""

    def __init__(self, name: str, image: Image.Image):
        self.name = name
        self.image = image
        self.x = 0
        self.y = 0

    @property
    def bounds(self) -> tuple[int, int, int, int]:
        return self.x, self.y, self.x + self.image.width, self.y + self.image.height

    def translate(self, dx: int, dy: int) -> None:
        self.x += dx
        self.y += dy

    def __repr__(self) -> str:
        return f"Layer({self.name!r}, bounds={self.bounds})"


class Document:
    """Stack of layers, top-most first, composited onto a transparent canvas."""

    def __init__(self, name: str = "sprite", width: int = 1, height: int = 1):
        self.name = name
        self.width = width
        self.height = height
        self.zoom = 0
        self.closed = False
        self.layers: list[Layer] = [Layer("Background", Image.new("RGBA", (width, height), TRANSPARENT))]

    def add_layer(self, layer: Layer) -> Layer:
        self.layers.insert(0, layer)
        return layer

    def remove_layer(self, layer: Layer) -> None:
        self.layers.remove(layer)

    def reveal_all(self) -> None:
        """Grow the canvas so every layer is fully visible."""

        if not self.layers:
            return
        left = min(layer.bounds[0] for layer in self.layers)
        top = min(layer.bounds[1] for layer in self.layers)
        shift_x, shift_y = -min(left, 0), -min(top, 0)
        if shift_x or shift_y:
            for layer in self.layers:
                layer.translate(shift_x, shift_y)
        self.width = max(self.width + shift_x, max(layer.bounds[2] for layer in self.layers))
        self.height = max(self.height + shift_y, max(layer.bounds[3] for layer in self.layers))

    def composite(self) -> Image.Image:
        canvas = Image.new("RGBA", (self.width, self.height), TRANSPARENT)
        for layer in reversed(self.layers):
            # Pillow rejects negative destinations; clip the source instead.
            sx, sy = max(0, -layer.x), max(0, -layer.y)
            if sx >= layer.image.width or sy >= layer.image.height:
                continue
            canvas.alpha_composite(layer.image, dest=(layer.x + sx, layer.y + sy), source=(sx, sy))
        return canvas

    def trim(
        self,
        trim_type: TrimType = TrimType.TRANSPARENT,
        top: bool = True,
        left: bool = True,
        bottom: bool = True,
        right: bool = True,
    ) -> None:
        """Crop fully transparent borders on the selected sides."""

        if TrimType(trim_type) is not TrimType.TRANSPARENT:
            raise ValueError(f"Unsupported trim type: {trim_type}")
        bbox = self.composite().getchannel("A").getbbox()
        if bbox is None:
            return
        x0 = bbox[0] if left else 0
        y0 = bbox[1] if top else 0
        x1 = bbox[2] if right else self.width
        y1 = bbox[3] if bottom else self.height
        for layer in self.layers:
            layer.translate(-x0, -y0)
        self.width, self.height = x1 - x0, y1 - y0
        logger.debug("Trimmed %s to %sx%s", self.name, self.width, self.height)

    def export_as_png(self, folder: Path, filename: Optional[str] = None) -> Path:
        target = Path(folder) / (filename or f"{self.name}.png")
        try:
            file_tools.ensure_directory(target.parent)
            self.composite().save(target, format="PNG")
        except OSError as exc:
            raise CollaboratorError("export", f"Could not write {target}: {exc}") from exc
        logger.info("Wrote sprite image to %s", target)
        return target

    def close(self, discard_changes: bool = True) -> None:
        if not discard_changes:
            raise ValueError("Documents are never saved on close; export them instead")
        for layer in self.layers:
            layer.image.close()
        self.layers = []
        self.closed = True


class Canvas:
    """Host for documents; the explicit stand-in for an application handle."""

    def __init__(self) -> None:
        self.active_document: Optional[Document] = None

    def create_blank_canvas(self, name: str = "sprite") -> Document:
        document = Document(name=name)
        self.active_document = document
        return document

    def load_images_as_layers(self, document: Document, paths: Iterable[Path]) -> list[Layer]:
        """Stack each file on top of the document, in the order given."""

        self.active_document = document
        for path in paths:
            path = Path(path)
            try:
                with Image.open(path) as source:
                    image = source.convert("RGBA")
            except (OSError, UnidentifiedImageError) as exc:
                raise CollaboratorError("load", f"Could not open image {path}: {exc}") from exc
            document.add_layer(Layer(path.stem, image))
            logger.debug("Placed %s (%sx%s)", path.name, image.width, image.height)
        return list(document.layers)

    def view_at_actual_size(self, document: Optional[Document] = None) -> None:
        document = document or self.active_document
        if document is not None:
            document.zoom = 100
