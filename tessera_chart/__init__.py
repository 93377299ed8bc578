from tessera_chart.backend import DrawingBackend, HTextAnchor, VTextAnchor, draw_text, saved_state, stroke_lines
from tessera_chart.errors import LayoutError
from tessera_chart.geometry import Point, Rect, RectSize, Vector, mkrect, pvadd, pvsub
from tessera_chart.label import Label, label, rlabel
from tessera_chart.legend import Legend, group_by_label, legend
from tessera_chart.output import align_pixels, render_to_image, render_to_pdf_file, render_to_png_file, render_to_ps_file
from tessera_chart.plot import FillSwatch, LineSwatch, Plot, PointSwatch
from tessera_chart.renderable import (
    Background,
    EmptyRenderable,
    Grid,
    Margins,
    Renderable,
    ToRenderable,
    add_margins,
    allocate,
    as_renderable,
    empty_renderable,
    fill_background,
    grid,
    horizontal,
    vertical,
)
from tessera_chart.styles import (
    DEFAULT_FONT_STYLE,
    DEFAULT_LEGEND_STYLE,
    FillStyle,
    FontStyle,
    LegendStyle,
    LineStyle,
    font_style,
    parse_hex_color,
    solid_fill_style,
    solid_line,
    validate_legend_style,
)

__all__ = [
    "Background",
    "DEFAULT_FONT_STYLE",
    "DEFAULT_LEGEND_STYLE",
    "DrawingBackend",
    "EmptyRenderable",
    "FillStyle",
    "FillSwatch",
    "FontStyle",
    "Grid",
    "HTextAnchor",
    "Label",
    "LayoutError",
    "Legend",
    "LegendStyle",
    "LineStyle",
    "LineSwatch",
    "Margins",
    "Plot",
    "Point",
    "PointSwatch",
    "Rect",
    "RectSize",
    "Renderable",
    "ToRenderable",
    "VTextAnchor",
    "Vector",
    "add_margins",
    "align_pixels",
    "allocate",
    "as_renderable",
    "draw_text",
    "empty_renderable",
    "fill_background",
    "font_style",
    "grid",
    "group_by_label",
    "horizontal",
    "label",
    "legend",
    "mkrect",
    "parse_hex_color",
    "pvadd",
    "pvsub",
    "render_to_image",
    "render_to_pdf_file",
    "render_to_png_file",
    "render_to_ps_file",
    "rlabel",
    "saved_state",
    "solid_fill_style",
    "solid_line",
    "stroke_lines",
    "validate_legend_style",
    "vertical",
]
