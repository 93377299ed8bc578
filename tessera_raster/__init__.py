from .canvas import blit, fill_rect, new_canvas
from .context import GraphicsState, RasterContext
from .draw_lines import draw_polyline
from .draw_text import draw_text, load_font, text_size
from .surface import ImageSurface, PDFSurface, PSSurface

__all__ = [
    "GraphicsState",
    "ImageSurface",
    "PDFSurface",
    "PSSurface",
    "RasterContext",
    "blit",
    "draw_polyline",
    "draw_text",
    "fill_rect",
    "load_font",
    "new_canvas",
    "text_size",
]
