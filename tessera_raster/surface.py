from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from tessera_raster.canvas import RGBA, blit, new_canvas
from tessera_raster.context import RasterContext


LOGGER = logging.getLogger(__name__)

PAGE_BACKGROUND: RGBA = (255, 255, 255, 255)


class ImageSurface:
    """In-memory RGBA raster surface."""

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 0)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("surface width/height must be > 0")
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self.canvas = new_canvas(self.width, self.height, color=background)

    def context(self) -> RasterContext:
        return RasterContext(self.canvas)

    def clear(self) -> None:
        self.canvas[:, :] = np.asarray(self.background, dtype=np.uint8)

    def write_to_png(self, path: str | Path) -> None:
        Image.fromarray(self.canvas).save(Path(path), format="PNG")


class _PagedSurface(ImageSurface):
    """Surface bound to an output path that collects pages until `finish()`."""

    def __init__(self, path: str | Path, width: int, height: int) -> None:
        super().__init__(width, height)
        self.path = Path(path)
        self._pages: list[Image.Image] = []
        self._finished = False

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def show_page(self) -> None:
        if self._finished:
            raise RuntimeError("surface already finished")
        page = new_canvas(self.width, self.height, color=PAGE_BACKGROUND)
        blit(page, self.canvas)
        self._pages.append(Image.fromarray(np.ascontiguousarray(page[:, :, :3])))
        self.clear()

    def finish(self) -> None:
        if self._finished:
            return
        if not self._pages:
            self.show_page()
        self._write_pages(self._pages)
        self._finished = True

    def _write_pages(self, pages: list[Image.Image]) -> None:
        raise NotImplementedError


class PDFSurface(_PagedSurface):
    def _write_pages(self, pages: list[Image.Image]) -> None:
        first, rest = pages[0], pages[1:]
        first.save(self.path, format="PDF", save_all=True, append_images=rest, resolution=72.0)


class PSSurface(_PagedSurface):
    def _write_pages(self, pages: list[Image.Image]) -> None:
        if len(pages) > 1:
            LOGGER.warning("PostScript output holds one page; dropping %d extra page(s)", len(pages) - 1)
        pages[0].save(self.path, format="EPS")
