from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tessera_chart import (
    Renderable,
    render_to_pdf_file,
    render_to_png_file,
    render_to_ps_file,
    validate_legend_style,
)
from tessera_chart.samples import label_sheet, legend_sheet


WRITERS = {
    "png": render_to_png_file,
    "pdf": render_to_pdf_file,
    "ps": render_to_ps_file,
}


def _format_for(path: Path, explicit: str | None) -> str:
    if explicit is not None:
        return explicit
    suffix = path.suffix.lower().lstrip(".")
    if suffix == "eps":
        return "ps"
    if suffix not in WRITERS:
        raise SystemExit(f"cannot infer output format from `{path}`; pass --format")
    return suffix


def _write(chart: Renderable, args: argparse.Namespace) -> None:
    fmt = _format_for(args.out, args.format)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    WRITERS[fmt](chart, args.width, args.height, args.out)
    print(args.out)


def _add_output_args(p: argparse.ArgumentParser, default_out: str, width: int, height: int) -> None:
    p.add_argument("--out", type=Path, default=Path(default_out))
    p.add_argument("--format", choices=sorted(WRITERS), default=None, help="Default: from --out suffix.")
    p.add_argument("--width", type=int, default=width)
    p.add_argument("--height", type=int, default=height)


def main() -> None:
    parser = argparse.ArgumentParser(prog="tessera")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    labels = sub.add_parser("labels", help="Render every label anchor combination on a 3x3 sheet.")
    labels.add_argument("--rotation", type=float, default=0.0, help="Label rotation in degrees, clockwise.")
    labels.add_argument("--text", default="Labels")
    _add_output_args(labels, "labels.png", 800, 800)

    leg = sub.add_parser("legend", help="Render a sample legend with grouped entries.")
    leg.add_argument("--margin", type=float, default=None, help="Gap after each label group.")
    leg.add_argument("--plot-size", type=float, default=None, help="Swatch width.")
    leg.add_argument("--font-size", type=float, default=None)
    _add_output_args(leg, "legend.png", 480, 120)
    args = parser.parse_args()
    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be > 0")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "labels":
        _write(label_sheet(rotation=args.rotation, text=args.text), args)
        return
    if args.command == "legend":
        overrides: dict[str, object] = {}
        if args.margin is not None:
            overrides["margin"] = args.margin
        if args.plot_size is not None:
            overrides["plot_size"] = args.plot_size
        if args.font_size is not None:
            overrides["label_style"] = {"size_px": args.font_size}
        try:
            style = validate_legend_style(overrides)
        except ValueError as exc:
            parser.error(str(exc))
        _write(legend_sheet(style), args)
        return


if __name__ == "__main__":
    main()
