"""FastAPI surface for Images2SpriteSheet builds."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, Field, field_validator
from starlette.concurrency import run_in_threadpool

from ..core import ArrangeBy, BuildMethod, BuildSettings, CSSFormat, ImageGeometry, LayoutSettings, SourceImage
from ..core import layout_engine, sprite_builder, stylesheet_renderer
from ..core.errors import CollaboratorError, ConfigurationError
from ..utils import file_tools, validators

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parents[2]
ARTIFACTS_DIR = Path(os.environ.get("I2S_ARTIFACTS_DIR", BASE_DIR / "artifacts"))
MEDIA_IMAGES_DIR = Path(os.environ.get("I2S_MEDIA_DIR", ARTIFACTS_DIR / "images"))
MAX_IMAGES = 500
file_tools.ensure_directory(ARTIFACTS_DIR)
file_tools.ensure_directory(MEDIA_IMAGES_DIR)


class SpriteSettingsRequest(BaseModel):
    """Layout and stylesheet options as sent by clients."""

    build_method: BuildMethod = BuildMethod.HORIZONTAL
    offset_spacing: int = Field(0, ge=0)
    arrange_by: ArrangeBy = ArrangeBy.ROWS
    row_nums: int = Field(1, ge=1)
    horizontal_spacing: int = Field(0, ge=0)
    vertical_spacing: int = Field(0, ge=0)
    selector_prefix: str = ""
    class_prefix: str = "sp-"
    selector_suffix: str = ""
    include_width_height: bool = True
    css_format: CSSFormat = CSSFormat.EXPANDED
    export_css_file: bool = True

    @field_validator("build_method", mode="before")
    @classmethod
    def _parse_build_method(cls, value):
        return validators.parse_build_method(value)

    @field_validator("arrange_by", mode="before")
    @classmethod
    def _parse_arrange_by(cls, value):
        return validators.parse_arrange_by(value)

    @field_validator("css_format", mode="before")
    @classmethod
    def _parse_css_format(cls, value):
        return validators.parse_css_format(value)

    def to_layout_settings(self) -> LayoutSettings:
        return LayoutSettings(**self.model_dump())


class ImageSize(BaseModel):
    name: str = Field(..., min_length=1)
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)


class LayoutRequest(BaseModel):
    """Geometry-only request; nothing is written to disk."""

    settings: SpriteSettingsRequest = Field(default_factory=SpriteSettingsRequest)
    images: list[ImageSize] = Field(..., min_length=1, max_length=MAX_IMAGES)


class BuildRequest(BaseModel):
    """Build request for images already stored in the media directory."""

    settings: SpriteSettingsRequest = Field(default_factory=SpriteSettingsRequest)
    images: list[str] = Field(..., min_length=1, max_length=MAX_IMAGES)
    export_sprite_image: bool = True
    sprite_name: str = Field("sprite", pattern=r"^[A-Za-z0-9_.-]+$")


class LayoutResponse(BaseModel):
    cssInfo: list[dict[str, str]]
    stylesheet: Optional[str] = None


class BuildResponse(BaseModel):
    sprite_url: Optional[str] = None
    css_url: Optional[str] = None
    width: int
    height: int
    result: dict[str, Any]


def create_app() -> FastAPI:
    app = FastAPI(title="Images2SpriteSheet Web", version="0.1.0")
    app.mount("/artifacts", StaticFiles(directory=ARTIFACTS_DIR), name="artifacts")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/media")
    async def list_media() -> dict[str, list[str]]:
        images = file_tools.list_files_with_extensions(MEDIA_IMAGES_DIR, validators.ALLOWED_IMAGE_EXTENSIONS)
        return {"images": [path.name for path in images]}

    @app.post("/api/layout", response_model=LayoutResponse)
    async def compute_layout(payload: LayoutRequest) -> LayoutResponse:
        layout = payload.settings.to_layout_settings()
        geometries = [
            ImageGeometry(id=index, width=image.width, height=image.height, name=image.name)
            for index, image in enumerate(payload.images)
        ]
        try:
            records = layout_engine.compute_layout(layout, geometries)
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        stylesheet = None
        if layout.export_css_file:
            stylesheet = stylesheet_renderer.render_stylesheet(
                records, layout.css_format, layout.include_width_height
            )
        return LayoutResponse(cssInfo=[record.as_css_info() for record in records], stylesheet=stylesheet)

    @app.post("/api/build", response_model=BuildResponse)
    async def build_sprite(payload: BuildRequest) -> BuildResponse:
        sources = [SourceImage(_resolve_media_path(name)) for name in payload.images]
        settings = BuildSettings(
            source_images=sources,
            output_folder=ARTIFACTS_DIR,
            layout=payload.settings.to_layout_settings(),
            export_sprite_image=payload.export_sprite_image,
            sprite_name=payload.sprite_name,
        )
        try:
            outcome = await run_in_threadpool(sprite_builder.build, settings)
        except ConfigurationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except CollaboratorError as exc:
            logger.error("Build failed during %s: %s", exc.operation, exc.reason)
            raise HTTPException(status_code=500, detail=f"{exc.operation} failed") from exc

        width, height = outcome.result.sprite_size or (0, 0)
        return BuildResponse(
            sprite_url=_artifact_url(outcome.sprite_path),
            css_url=_artifact_url(outcome.css_path),
            width=width,
            height=height,
            result=outcome.result.to_dict(),
        )

    return app


def _artifact_url(path: Path | None) -> Optional[str]:
    if path is None:
        return None
    try:
        rel = path.resolve().relative_to(ARTIFACTS_DIR.resolve())
        return f"/artifacts/{rel.as_posix()}"
    except ValueError:
        return f"/artifacts/{path.name}"


def _resolve_media_path(name: str) -> Path:
    """Resolve an image name inside the media directory and validate its extension."""

    base_dir = MEDIA_IMAGES_DIR.resolve()
    try:
        resolved = (base_dir / name).resolve(strict=True)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=f"Media not found: {name}") from exc
    if base_dir not in resolved.parents:
        raise HTTPException(status_code=400, detail="Media outside allowed directory")
    if resolved.suffix.lower() not in validators.ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(status_code=400, detail="Unsupported media type")
    return resolved


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("images2spritesheet.web.server:app", host="0.0.0.0", port=8000, reload=True)
