"""Command-line interface for the foot measurement pipeline."""

import argparse
import json
import logging
import os
from typing import Optional

from . import background, io, viz
from .config import MeasureConfig
from .contour import edge_map
from .errors import FootMeasureError
from .models import MeasurementResult
from .pipeline import measure_views
from .preprocess import Preprocessed, preprocess

logger = logging.getLogger(__name__)


def format_report(result: MeasurementResult) -> str:
    unit = result.unit
    lines = [
        "REFERENCE MEASUREMENT",
        "**********************************",
        f"Radius in image (pixels) - {result.reference.radius}",
        f"Radius in real life (known constant) - {result.reference_radius}",
        f"{unit} per pixel - {result.scale:.5f}",
        "",
        "FOOT MEASUREMENT",
        "**********************************",
        f"Foot length (pixels) - {result.foot.height}",
        f"Foot length ({unit}) - {result.height:.2f}",
        f"Foot width (pixels) - {result.foot.width}",
        f"Foot width ({unit}) - {result.width:.2f}",
    ]
    return "\n".join(lines)


def _write_json(path: str, payload: dict) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def _write_debug_views(debug_dir: str, views: Preprocessed, config: MeasureConfig) -> None:
    os.makedirs(debug_dir, exist_ok=True)
    io.save_image(os.path.join(debug_dir, "mask.png"), viz.caption(views.mask, "HSV-Filtered Image"))
    edges = edge_map(views.mask, config)
    io.save_image(os.path.join(debug_dir, "edges.png"), viz.caption(edges, "Canny Edge Detection"))
    io.save_image(os.path.join(debug_dir, "gray.png"), views.gray)


def run_pipeline(image_path: str, config: MeasureConfig, output: Optional[str] = None,
                 json_path: Optional[str] = None, debug_dir: Optional[str] = None,
                 remove_bg: bool = False, parallel: bool = False,
                 font_path: Optional[str] = None) -> MeasurementResult:
    img = io.load_image(image_path)

    mask_source = background.remove_background(img) if remove_bg else None

    try:
        views = preprocess(img, config, mask_source=mask_source)
        if debug_dir:
            _write_debug_views(debug_dir, views, config)
            if mask_source is not None:
                io.save_image(os.path.join(debug_dir, "no_bg.png"), mask_source)
        result = measure_views(views, config, parallel=parallel)
    except FootMeasureError as exc:
        if json_path:
            _write_json(json_path, {"error": exc.kind, "message": str(exc)})
        raise

    if json_path:
        _write_json(json_path, result.to_dict())
        logger.info("Saved report to %s", json_path)

    if output:
        annotated = viz.draw_measurements_on_image(img, result, font_path=font_path)
        io.save_image(output, annotated)
        print(f"Saved annotated image to {output}")

    print(format_report(result))
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Measure a foot against a circular reference token")
    parser.add_argument("image", help="Input image path")
    parser.add_argument("--config", help="JSON file with pipeline parameters")
    parser.add_argument("--output", help="Path to save the annotated image")
    parser.add_argument("--json", dest="json_path", help="Path to save the numeric report as JSON")
    parser.add_argument("--debug-dir", help="Directory for captioned mask and edge images")
    parser.add_argument("--reference-radius", type=float, help="Known radius of the reference token")
    parser.add_argument("--unit", help="Unit label of the reference radius")
    parser.add_argument("--saturation-floor", type=int, help="Skin mask saturation cutoff (0-255)")
    parser.add_argument("--min-radius", type=int, help="Smallest reference radius to search for (px)")
    parser.add_argument("--max-radius", type=int, help="Largest reference radius to search for (px)")
    parser.add_argument("--remove-background", action="store_true",
                        help="Remove the background with rembg before skin segmentation")
    parser.add_argument("--parallel", action="store_true", help="Run both detectors on worker threads")
    parser.add_argument("--font-path", default=None, help="TrueType font for the report overlay")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = MeasureConfig.from_file(args.config) if args.config else MeasureConfig()
        config = config.replace(
            reference_radius=args.reference_radius,
            unit=args.unit,
            saturation_floor=args.saturation_floor,
            min_radius=args.min_radius,
            max_radius=args.max_radius,
        )
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}")

    try:
        run_pipeline(args.image, config, output=args.output, json_path=args.json_path,
                     debug_dir=args.debug_dir, remove_bg=args.remove_background,
                     parallel=args.parallel, font_path=args.font_path)
    except FileNotFoundError as exc:
        raise SystemExit(str(exc))
    except FootMeasureError as exc:
        raise SystemExit(f"Measurement failed ({exc.kind}): {exc}")


if __name__ == "__main__":
    main()
