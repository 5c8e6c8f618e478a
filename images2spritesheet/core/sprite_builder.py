"""Build pipeline: load images, lay them out, export the sprite and stylesheet."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from . import BuildOutcome, BuildResult, BuildSettings, ImageGeometry
from . import layout_engine, stylesheet_renderer
from .canvas import Canvas, Document, Layer, TrimType
from ..utils import file_tools, validators

logger = logging.getLogger(__name__)


def populate_images_to_layers(canvas: Canvas, document: Document, settings: BuildSettings) -> list[Layer]:
    """Place every source image on the document and return layers in selection order.

    The canvas stacks each new layer on top, so files are submitted last to
    first. The blank base layer of the new document ends up at the bottom and
    is dropped.
    """

    paths = [source.path for source in settings.source_images]
    canvas.load_images_as_layers(document, reversed(paths))
    layers = list(document.layers)
    document.remove_layer(layers.pop())
    return layers


def layer_geometries(layers: Sequence[Layer]) -> list[ImageGeometry]:
    geometries = []
    for index, layer in enumerate(layers):
        x0, y0, x1, y1 = layer.bounds
        geometries.append(ImageGeometry(id=index, width=x1 - x0, height=y1 - y0, name=layer.name))
    return geometries


def build_sprite(settings: BuildSettings, canvas: Optional[Canvas] = None) -> BuildResult:
    """Compose the sprite document and return the per-image layout records."""

    validators.validate_build_settings(settings)
    canvas = canvas or Canvas()
    layout = settings.layout

    document = canvas.create_blank_canvas(settings.sprite_name)
    layers = populate_images_to_layers(canvas, document, settings)
    geometries = layer_geometries(layers)
    logger.info(
        "Building %s sprite from %s images",
        validators.parse_build_method(layout.build_method).value,
        len(geometries),
    )

    def place_at(image_id: int, x: int, y: int) -> None:
        layers[image_id].translate(x, y)

    css_info = layout_engine.layout_sprite(layout, geometries, place_at)

    document.reveal_all()
    # Offsets are measured from the top-left corner, so only trailing space goes.
    document.trim(TrimType.TRANSPARENT, top=False, left=False)
    canvas.view_at_actual_size(document)
    sprite_size = (document.width, document.height)

    sprite_path = None
    if settings.export_sprite_image:
        sprite_path = document.export_as_png(settings.output_folder, f"{settings.sprite_name}.png")

    if settings.close_generated_document:
        document.close(discard_changes=True)

    if settings.open_output_folder:
        file_tools.open_folder(settings.output_folder)

    return BuildResult(
        css_info=css_info,
        export_css_file=layout.export_css_file,
        output_folder=settings.output_folder,
        css_format=validators.parse_css_format(layout.css_format),
        include_width_height=layout.include_width_height,
        sprite_path=sprite_path,
        sprite_size=sprite_size,
        sprite_name=settings.sprite_name,
    )


def build(settings: BuildSettings, canvas: Optional[Canvas] = None) -> BuildOutcome:
    """Run the whole build: sprite first, then the stylesheet."""

    result = build_sprite(settings, canvas)
    css_path = stylesheet_renderer.build_css(result)
    return BuildOutcome(result=result, css_path=css_path)
