"""Tests for the command-line entry point."""

import json

from shapesight import cli
from shapesight.cli import main
from shapesight.engine.pipeline import Pipeline
from shapesight.engine.registry import Layer, TransformRegistry, TransformSpec
from shapesight.utils.image_loader import encode_png
from tests.conftest import blank_image, square_image


def _write(path, pixels):
    path.write_bytes(encode_png(pixels))
    return path


def test_text_report(tmp_path, capsys):
    img = _write(tmp_path / "square.png", square_image())
    assert main([str(img)]) == 0
    out = capsys.readouterr().out
    assert "[square.png]" in out
    assert "Shapes Found: 1" in out
    assert "- Rectangle" in out


def test_json_output(tmp_path, capsys):
    img = _write(tmp_path / "square.png", square_image())
    assert main([str(img), "--json"]) == 0
    data = json.loads(capsys.readouterr().out.strip())
    assert data["shapes"][0]["type"] == "rectangle"


def test_directory_input_sorted(tmp_path, capsys):
    _write(tmp_path / "b.png", blank_image(20, 20))
    _write(tmp_path / "a.png", square_image())
    (tmp_path / "notes.txt").write_text("ignored")
    assert main([str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert out.index("[a.png]") < out.index("[b.png]")
    assert "No shapes detected." in out
    assert "notes.txt" not in out


def test_overlay_output(tmp_path):
    img = _write(tmp_path / "square.png", square_image())
    out_dir = tmp_path / "out"
    assert main([str(img), "--overlay", str(out_dir)]) == 0
    overlay = out_dir / "square_shapes.png"
    assert overlay.read_bytes().startswith(b"\x89PNG")


def test_bad_file_fails(tmp_path, capsys):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"garbage")
    good = _write(tmp_path / "good.png", square_image())
    assert main([str(bad), str(good)]) == 1
    captured = capsys.readouterr()
    assert "[bad.png]" in captured.err
    assert "[good.png]" in captured.out


def test_empty_directory_fails(tmp_path, capsys):
    assert main([str(tmp_path)]) == 1
    assert "No images found." in capsys.readouterr().err


def test_detection_failure_is_reported(tmp_path, capsys, monkeypatch):
    def explode(ctx):
        raise RuntimeError("labeler offline")

    reg = TransformRegistry()
    reg.register(TransformSpec(id="T1.01", layer=Layer.SEGMENTATION, fn=explode))
    monkeypatch.setattr(cli, "create_pipeline", lambda: Pipeline(registry=reg))

    img = _write(tmp_path / "square.png", square_image())
    assert main([str(img)]) == 1
    captured = capsys.readouterr()
    assert "labeler offline" in captured.err
    assert "Shapes Found" not in captured.out
