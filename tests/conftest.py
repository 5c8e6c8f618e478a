from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture
def make_image(tmp_path):
    """Write a solid RGBA PNG and return its path."""

    def _make(name: str, width: int, height: int, color=(255, 0, 0, 255), folder: Path | None = None) -> Path:
        target_dir = folder or tmp_path / "src"
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{name}.png"
        Image.new("RGBA", (width, height), color).save(path)
        return path

    return _make
