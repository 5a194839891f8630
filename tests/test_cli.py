from PIL import Image

from wcloud.__main__ import build_parser, main

TEXT = "luke luke luke leia leia han chewbacca droid droid droid droid"


def test_png_output(tmp_path):
    text = tmp_path / "script.txt"
    text.write_text(TEXT, encoding="utf-8")
    out = tmp_path / "cloud.png"
    code = main(["--text", str(text), "--output", str(out), "--width", "200",
                 "--height", "100", "--random-seed", "3", "--background", "white"])
    assert code == 0
    assert Image.open(out).size == (200, 100)


def test_svg_output_with_mask_and_exclusions(tmp_path):
    text = tmp_path / "script.txt"
    text.write_text(TEXT, encoding="utf-8")
    exclude = tmp_path / "exclude.txt"
    exclude.write_text("droid\n", encoding="utf-8")
    mask = tmp_path / "mask.png"
    Image.new("RGB", (150, 150), "black").save(mask)
    out = tmp_path / "cloud.svg"
    code = main(["-t", str(text), "-o", str(out), "--mask", str(mask),
                 "--exclude-words", str(exclude), "--random-seed", "1"])
    assert code == 0
    svg = out.read_text(encoding="utf-8")
    assert 'width="150" height="150"' in svg
    assert "droid" not in svg
    assert "luke" in svg


def test_invalid_setting_exits_with_error(tmp_path, capsys):
    text = tmp_path / "script.txt"
    text.write_text(TEXT, encoding="utf-8")
    code = main(["--text", str(text), "--relative-scaling", "2"])
    assert code == 1
    assert "relative_scaling" in capsys.readouterr().err


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.width, args.height, args.scale) == (400, 200, 1.0)
    assert args.output is None and not args.repeat
