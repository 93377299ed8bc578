from __future__ import annotations

from functools import lru_cache
import logging
import re
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from tessera_raster.canvas import RGBA, blend_coverage


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
SANS_FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
    "verdana",
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    """Ink extents of `text` in whole pixels, unrotated."""

    font = load_font(font_family=font_family, font_size_px=font_size_px)
    if not text:
        ascent, descent = _metrics(font)
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def draw_text(
    dst: np.ndarray,
    text: str,
    color: RGBA,
    transform: np.ndarray,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> None:
    """Draw `text` with its baseline origin mapped through a 2x3 affine `transform`.

    Text space has x along the baseline and y pointing down, with (0, 0) at the
    left end of the baseline. `dst` is written in place; anything falling outside
    it is dropped.
    """

    if not text:
        return
    font = load_font(font_family=font_family, font_size_px=font_size_px)
    mask, left, top = _render_mask(text, font)
    mh, mw = mask.shape

    linear = np.asarray(transform[:, :2], dtype=np.float64)
    offset = np.asarray(transform[:, 2], dtype=np.float64)
    if abs(float(np.linalg.det(linear))) < 1e-12:
        return

    corners = np.asarray(
        [[left, top], [left + mw, top], [left, top + mh], [left + mw, top + mh]],
        dtype=np.float64,
    )
    device = corners @ linear.T + offset
    x0 = max(0, int(np.floor(device[:, 0].min())))
    y0 = max(0, int(np.floor(device[:, 1].min())))
    x1 = min(dst.shape[1], int(np.ceil(device[:, 0].max())))
    y1 = min(dst.shape[0], int(np.ceil(device[:, 1].max())))
    if x1 <= x0 or y1 <= y0:
        return

    inv = np.linalg.inv(linear)
    # Output pixel (X, Y) of the patch sits at device (X + x0, Y + y0).
    origin = inv @ (np.asarray([x0, y0], dtype=np.float64) - offset)
    data = (
        float(inv[0, 0]),
        float(inv[0, 1]),
        float(origin[0] - left),
        float(inv[1, 0]),
        float(inv[1, 1]),
        float(origin[1] - top),
    )
    patch = Image.fromarray(mask).transform(
        (x1 - x0, y1 - y0),
        Image.Transform.AFFINE,
        data,
        resample=Image.Resampling.BILINEAR,
    )
    coverage = np.asarray(patch, dtype=np.float32) / 255.0
    blend_coverage(dst[y0:y1, x0:x1], coverage, color)


def _metrics(font: Font) -> tuple[int, int]:
    if isinstance(font, ImageFont.FreeTypeFont):
        return font.getmetrics()
    _, top, _, bottom = font.getbbox("Xg")
    return (int(bottom - top), 0)


@lru_cache(maxsize=128)
def _render_mask(text: str, font: Font) -> tuple[np.ndarray, int, int]:
    """Coverage mask of `text` plus the mask's top-left offset from the baseline origin."""

    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    ascent, _ = _metrics(font)
    return np.asarray(image, dtype=np.uint8), int(left), int(top) - int(ascent)


@lru_cache(maxsize=64)
def load_font(font_family: str, font_size_px: float) -> Font:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        LOGGER.warning("no font file found for %r; using Pillow default font", font_family)
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError as exc:
        LOGGER.warning("cannot load font %s (%s); using Pillow default font", font_path, exc)
        return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = _normalize_name(pattern)
        for path in candidates:
            stem = _normalize_name(path.stem)
            if stem == p:
                return path
        partial = [path for path in candidates if p in _normalize_name(path.stem)]
        if partial:
            return min(partial, key=lambda path: len(path.stem))
    return None


def _normalize_name(name: str) -> str:
    return re.sub(r"[\s_\-]+", "", name.lower())
