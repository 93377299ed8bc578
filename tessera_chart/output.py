from __future__ import annotations

import logging
from pathlib import Path

from tessera_chart.backend import DrawingBackend
from tessera_chart.geometry import rect_from_size
from tessera_chart.renderable import Renderable, ToRenderable, as_renderable
from tessera_raster.surface import ImageSurface, PDFSurface, PSSurface


LOGGER = logging.getLogger(__name__)


def align_pixels(ctx: DrawingBackend) -> None:
    # Shift to pixel centres so a 1-unit stroke covers exactly one pixel row/column.
    ctx.translate(0.5, 0.5)


def render_to_image(chart: Renderable | ToRenderable, width: int, height: int) -> ImageSurface:
    """Render into a fresh pixel-aligned image surface and return it."""

    surface = ImageSurface(width, height)
    ctx = surface.context()
    align_pixels(ctx)
    as_renderable(chart).render(ctx, rect_from_size(width, height))
    return surface


def render_to_png_file(chart: Renderable | ToRenderable, width: int, height: int, path: str | Path) -> None:
    surface = render_to_image(chart, width, height)
    surface.write_to_png(path)
    LOGGER.debug("wrote %dx%d PNG to %s", width, height, path)


def render_to_pdf_file(chart: Renderable | ToRenderable, width: int, height: int, path: str | Path) -> None:
    _render_paged(PDFSurface(path, width, height), chart)
    LOGGER.debug("wrote %dx%d PDF to %s", width, height, path)


def render_to_ps_file(chart: Renderable | ToRenderable, width: int, height: int, path: str | Path) -> None:
    _render_paged(PSSurface(path, width, height), chart)
    LOGGER.debug("wrote %dx%d PostScript to %s", width, height, path)


def _render_paged(surface: PDFSurface | PSSurface, chart: Renderable | ToRenderable) -> None:
    ctx = surface.context()
    as_renderable(chart).render(ctx, rect_from_size(surface.width, surface.height))
    surface.show_page()
    surface.finish()
