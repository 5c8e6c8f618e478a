from pathlib import Path

import pytest

from images2spritesheet.core import BuildResult, CSSFormat, PositionedImage
from images2spritesheet.core import stylesheet_renderer
from images2spritesheet.core.errors import ConfigurationError

RECORDS = [
    PositionedImage(id=0, selector=".sp-a", width="40px", height="20px", background_position="0 0", offset_x=0, offset_y=0),
    PositionedImage(id=1, selector=".sp-b", width="60px", height="20px", background_position="-50px 0", offset_x=50, offset_y=0),
]


def _result(tmp_path: Path, **overrides) -> BuildResult:
    values = dict(
        css_info=RECORDS,
        export_css_file=True,
        output_folder=tmp_path,
        css_format=CSSFormat.EXPANDED,
        include_width_height=True,
    )
    values.update(overrides)
    return BuildResult(**values)


def test_expanded_stylesheet_with_width_height():
    text = stylesheet_renderer.render_stylesheet(RECORDS, CSSFormat.EXPANDED, True)
    assert text == (
        ".sp-a {\n\twidth: 40px;\n\theight: 20px;\n\tbackground-position: 0 0;\n}\n"
        "\n"
        ".sp-b {\n\twidth: 60px;\n\theight: 20px;\n\tbackground-position: -50px 0;\n}\n"
    )


def test_expanded_stylesheet_without_width_height():
    text = stylesheet_renderer.render_stylesheet(RECORDS[:1], CSSFormat.EXPANDED, False)
    assert text == ".sp-a {\n\tbackground-position: 0 0;\n}\n"


def test_compact_stylesheet():
    text = stylesheet_renderer.render_stylesheet(RECORDS, "compact", True)
    assert text.splitlines() == [
        ".sp-a { width: 40px; height: 20px; background-position: 0 0; }",
        ".sp-b { width: 60px; height: 20px; background-position: -50px 0; }",
    ]
    assert stylesheet_renderer.render_stylesheet(RECORDS[:1], CSSFormat.COMPACT, False) == (
        ".sp-a { background-position: 0 0; }"
    )


def test_formats_carry_identical_values():
    expanded = stylesheet_renderer.render_stylesheet(RECORDS, CSSFormat.EXPANDED, True)
    compact = stylesheet_renderer.render_stylesheet(RECORDS, CSSFormat.COMPACT, True)
    for record in RECORDS:
        for value in (record.selector, record.width, record.height, record.background_position):
            assert value in expanded
            assert value in compact
    assert "".join(expanded.split()) == "".join(compact.split())


def test_braces_in_values_are_not_template_fields():
    record = PositionedImage(id=0, selector=".sp-{x}}", width="1px", height="1px", background_position="0 0", offset_x=0, offset_y=0)
    text = stylesheet_renderer.render_stylesheet([record], CSSFormat.COMPACT, False)
    assert text == ".sp-{x}} { background-position: 0 0; }"


def test_unknown_format_rejected():
    with pytest.raises(ConfigurationError):
        stylesheet_renderer.css_template("Minified", True)


def test_build_css_disabled_does_nothing(tmp_path):
    calls = []
    result = _result(tmp_path, export_css_file=False)
    assert stylesheet_renderer.build_css(result, save_text_file=lambda *args: calls.append(args)) is None
    assert calls == []


def test_build_css_hands_text_to_persistence(tmp_path):
    calls = []

    def save(contents, folder, filename):
        calls.append((contents, folder, filename))
        return folder / filename

    result = _result(tmp_path, css_format=CSSFormat.COMPACT, include_width_height=False)
    path = stylesheet_renderer.build_css(result, save_text_file=save)
    assert path == tmp_path / "sprite.css"
    assert calls == [
        (
            ".sp-a { background-position: 0 0; }\n.sp-b { background-position: -50px 0; }",
            tmp_path,
            "sprite.css",
        )
    ]


def test_build_css_writes_file(tmp_path):
    path = stylesheet_renderer.build_css(_result(tmp_path / "out", sprite_name="icons"))
    assert path == tmp_path / "out" / "icons.css"
    assert path.read_text(encoding="utf-8").startswith(".sp-a {\n")
