"""shapesight — detect shapes in image files from the command line.

    shapesight circle.png drawing.svg
    shapesight scans/ --json
    shapesight photo.png --overlay out/
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from shapesight.config import settings
from shapesight.engine.pipeline import DetectionError, create_pipeline, detect_shapes
from shapesight.utils.image_loader import ImageDecodeError, load_image
from shapesight.utils.rendering import format_result_text, render_overlay

logger = logging.getLogger(__name__)

_IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".svg", ".webp", ".tif", ".tiff"}


def _collect(inputs: list[str]) -> list[Path]:
    paths: list[Path] = []
    for item in inputs:
        p = Path(item)
        if p.is_dir():
            paths.extend(sorted(f for f in p.iterdir() if f.suffix.lower() in _IMAGE_SUFFIXES))
        else:
            paths.append(p)
    return paths


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="shapesight", description="Detect geometric shapes in images")
    parser.add_argument("inputs", nargs="+", help="Image files or folders of images")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("-o", "--overlay", metavar="DIR", help="Write annotated PNGs to this folder")
    parser.add_argument("--log-level", default=settings.shapesight_log_level, help="Logging level")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    paths = _collect(args.inputs)
    if not paths:
        print("No images found.", file=sys.stderr)
        return 1

    overlay_dir = Path(args.overlay) if args.overlay else None
    if overlay_dir is not None:
        overlay_dir.mkdir(parents=True, exist_ok=True)

    pipeline = create_pipeline()
    failures = 0
    for path in paths:
        try:
            pixels = load_image(path)
        except (ImageDecodeError, OSError) as e:
            print(f"[{path.name}] {e}", file=sys.stderr)
            failures += 1
            continue

        height, width = pixels.shape[:2]
        try:
            result = detect_shapes(pixels, width, height, pipeline=pipeline)
        except DetectionError as e:
            print(f"[{path.name}] {e}", file=sys.stderr)
            failures += 1
            continue

        if args.json:
            print(result.model_dump_json())
        else:
            print(f"[{path.name}]")
            print(format_result_text(result))
            print()

        if overlay_dir is not None:
            out = overlay_dir / f"{path.stem}_shapes.png"
            out.write_bytes(render_overlay(pixels, result))
            logger.info("Saved overlay: %s", out)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
