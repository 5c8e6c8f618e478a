from images2spritesheet import cli


def test_build_parser_creates_arguments():
    parser = cli.build_parser()
    args = parser.parse_args(["a.png", "b.png", "-o", "out", "--build-method", "tiled", "--row-nums", "4", "--dry-run"])
    assert [p.name for p in args.images] == ["a.png", "b.png"]
    assert args.output.name == "out"
    assert args.row_nums == 4
    assert args.dry_run is True
    assert args.class_prefix == "sp-"


def test_settings_from_args_maps_flags():
    args = cli.build_parser().parse_args(
        ["a.png", "-o", "out", "--css-format", "compact", "--no-width-height", "--no-sprite", "--keep-open"]
    )
    settings = cli.settings_from_args(args)
    assert settings.layout.css_format.value == "Compact"
    assert settings.layout.include_width_height is False
    assert settings.export_sprite_image is False
    assert settings.close_generated_document is False


def test_main_builds_sprite_and_css(make_image, tmp_path, capsys):
    paths = [make_image("a", 40, 20), make_image("b", 60, 20)]
    out = tmp_path / "out"
    code = cli.main([str(p) for p in paths] + ["-o", str(out), "--offset-spacing", "10"])
    assert code == 0
    assert (out / "sprite.png").exists()
    assert ".sp-b {" in (out / "sprite.css").read_text(encoding="utf-8")
    assert str(out / "sprite.css") in capsys.readouterr().out


def test_main_dry_run_prints_css_and_writes_nothing(make_image, tmp_path, capsys):
    out = tmp_path / "out"
    code = cli.main([str(make_image("home icon", 8, 8)), "-o", str(out), "--css-format", "Compact", "--dry-run"])
    assert code == 0
    assert capsys.readouterr().out.strip() == ".sp-homeicon { width: 8px; height: 8px; background-position: 0 0; }"
    assert not out.exists()


def test_main_returns_two_on_bad_settings(make_image, tmp_path):
    code = cli.main([str(make_image("a", 2, 2)), "-o", str(tmp_path), "--build-method", "Tiled", "--row-nums", "0"])
    assert code == 2
    assert cli.main([str(make_image("a", 2, 2)), "-o", str(tmp_path), "--css-format", "Minified"]) == 2


def test_main_returns_one_on_missing_image(tmp_path):
    assert cli.main([str(tmp_path / "missing.png"), "-o", str(tmp_path / "out")]) == 1


def test_main_dry_run_without_css_prints_nothing(make_image, tmp_path, capsys):
    code = cli.main([str(make_image("a", 2, 2)), "-o", str(tmp_path / "out"), "--no-css", "--dry-run"])
    assert code == 0
    assert capsys.readouterr().out == ""
    assert not (tmp_path / "out").exists()


def test_main_returns_one_on_unwritable_output(make_image, tmp_path):
    blocker = tmp_path / "taken"
    blocker.write_text("not a folder")
    assert cli.main([str(make_image("a", 2, 2)), "-o", str(blocker)]) == 1
