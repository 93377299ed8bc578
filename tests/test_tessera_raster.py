from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

import numpy as np
from PIL import Image

from tessera_chart import (
    FillSwatch,
    LineSwatch,
    Point,
    PointSwatch,
    Rect,
    add_margins,
    fill_background,
    empty_renderable,
    label,
    render_to_image,
    render_to_pdf_file,
    render_to_png_file,
    render_to_ps_file,
    rlabel,
    saved_state,
    solid_fill_style,
    solid_line,
)
from tessera_chart.styles import FontStyle
from tessera_raster import ImageSurface, PDFSurface, RasterContext, blit, fill_rect, new_canvas, text_size


RED = (255, 0, 0, 255)


def _ink_box(canvas: np.ndarray) -> tuple[int, int, int, int] | None:
    ys, xs = np.nonzero(canvas[:, :, 3] > 0)
    if xs.size == 0:
        return None
    return int(xs.min()), int(ys.min()), int(xs.max()) + 1, int(ys.max()) + 1


class CanvasTests(unittest.TestCase):
    def test_new_canvas_fills_every_pixel(self) -> None:
        canvas = new_canvas(4, 3, color=(1, 2, 3, 4))
        self.assertEqual(canvas.shape, (3, 4, 4))
        self.assertTrue(np.all(canvas == np.asarray([1, 2, 3, 4], dtype=np.uint8)))

    def test_fill_rect_is_half_open_and_clipped(self) -> None:
        canvas = new_canvas(10, 10)
        fill_rect(canvas, -5, 2, 3, 4, RED)
        self.assertEqual(_ink_box(canvas), (0, 2, 3, 4))

    def test_blit_composites_opaque_source(self) -> None:
        dst = new_canvas(6, 6, color=(255, 255, 255, 255))
        src = new_canvas(2, 2, color=RED)
        blit(dst, src, 4, 4)
        self.assertEqual(tuple(int(v) for v in dst[5, 5]), RED)
        self.assertEqual(tuple(int(v) for v in dst[3, 3]), (255, 255, 255, 255))


class RasterContextTests(unittest.TestCase):
    def test_restore_brings_back_clip_transform_and_colour(self) -> None:
        ctx = RasterContext(new_canvas(20, 20))
        before = ctx.state
        ctx.save()
        ctx.translate(3, 4)
        ctx.rotate(0.5)
        ctx.clip_rect(0, 0, 5, 5)
        ctx.set_fill_color(RED)
        ctx.restore()
        self.assertIs(ctx.state, before)
        self.assertEqual(ctx.depth, 0)

    def test_restore_without_save_raises(self) -> None:
        ctx = RasterContext(new_canvas(4, 4))
        with self.assertRaises(RuntimeError):
            ctx.restore()

    def test_saved_state_restores_when_drawing_fails(self) -> None:
        ctx = RasterContext(new_canvas(4, 4))
        with self.assertRaises(RuntimeError):
            with saved_state(ctx):
                ctx.translate(1, 1)
                ctx.show_text("no current point")
        self.assertEqual(ctx.depth, 0)
        self.assertEqual(ctx.user_to_device(0, 0), (0.0, 0.0))

    def test_paint_fills_only_the_clip_region(self) -> None:
        ctx = RasterContext(new_canvas(20, 20))
        ctx.clip_rect(5, 6, 10, 12)
        ctx.set_fill_color(RED)
        ctx.paint()
        self.assertEqual(_ink_box(ctx.canvas), (5, 6, 10, 12))

    def test_nested_clips_intersect(self) -> None:
        ctx = RasterContext(new_canvas(20, 20))
        ctx.clip_rect(0, 0, 10, 10)
        ctx.clip_rect(5, 5, 20, 20)
        ctx.set_fill_color(RED)
        ctx.paint()
        self.assertEqual(_ink_box(ctx.canvas), (5, 5, 10, 10))

    def test_zero_area_clip_paints_nothing(self) -> None:
        ctx = RasterContext(new_canvas(20, 20))
        ctx.clip_rect(10, 10, 10, 10)
        ctx.paint()
        self.assertIsNone(_ink_box(ctx.canvas))

    def test_inverted_clip_is_normalised(self) -> None:
        ctx = RasterContext(new_canvas(20, 20))
        ctx.clip_rect(15, 15, 5, 5)
        ctx.set_fill_color(RED)
        ctx.paint()
        self.assertEqual(_ink_box(ctx.canvas), (5, 5, 15, 15))

    def test_half_pixel_clip_covers_only_enclosed_pixel_centres(self) -> None:
        ctx = RasterContext(new_canvas(20, 20))
        ctx.translate(0.5, 0.5)
        ctx.clip_rect(4, 6, 12, 9)
        ctx.set_fill_color(RED)
        ctx.paint()
        self.assertEqual(_ink_box(ctx.canvas), (4, 6, 12, 9))

    def test_translate_moves_user_origin(self) -> None:
        ctx = RasterContext(new_canvas(20, 20))
        ctx.translate(0.5, 0.5)
        ctx.translate(2, 3)
        self.assertEqual(ctx.user_to_device(1, 1), (3.5, 4.5))

    def test_stroke_draws_horizontal_line(self) -> None:
        ctx = RasterContext(new_canvas(20, 20))
        ctx.set_line(RED, 1)
        ctx.move_to(2, 7)
        ctx.line_to(12, 7)
        ctx.stroke()
        self.assertEqual(_ink_box(ctx.canvas), (2, 7, 13, 8))

    def test_text_size_reports_positive_extents(self) -> None:
        ctx = RasterContext(new_canvas(4, 4))
        ctx.set_font("sans", 20)
        w, h = ctx.text_size("Labels")
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)
        self.assertEqual((w, h), tuple(float(v) for v in text_size("Labels", font_family="sans", font_size_px=20)))


class RasterRenderingTests(unittest.TestCase):
    def test_background_renders_inside_its_rect(self) -> None:
        surface = ImageSurface(30, 30)
        bg = fill_background(solid_fill_style(1, 0, 0), empty_renderable)
        bg.render(surface.context(), Rect(Point(5, 5), Point(15, 20)))
        self.assertEqual(_ink_box(surface.canvas), (5, 5, 15, 20))
        self.assertEqual(tuple(int(v) for v in surface.canvas[10, 10]), RED)

    def test_centred_label_ink_is_centred(self) -> None:
        surface = ImageSurface(200, 100)
        fs = FontStyle(family="sans", size_px=24.0, color=(0, 0, 0, 255))
        label(fs, "centre", "centre", "HHHH").render(surface.context(), Rect(Point(0, 0), Point(200, 100)))
        box = _ink_box(surface.canvas)
        self.assertIsNotNone(box)
        x0, y0, x1, y1 = box
        self.assertLessEqual(abs((x0 + x1) / 2 - 100), 3)
        self.assertLessEqual(abs((y0 + y1) / 2 - 50), 3)

    def test_quarter_turn_label_ink_is_tall(self) -> None:
        surface = ImageSurface(120, 200)
        fs = FontStyle(family="sans", size_px=20.0)
        rlabel(fs, "centre", "centre", 90, "rotated").render(surface.context(), Rect(Point(0, 0), Point(120, 200)))
        box = _ink_box(surface.canvas)
        self.assertIsNotNone(box)
        x0, y0, x1, y1 = box
        self.assertGreater(y1 - y0, x1 - x0)

    def test_swatches_draw_inside_their_rect(self) -> None:
        rect = Rect(Point(10, 10), Point(30, 30))
        for swatch in (
            LineSwatch(solid_line(1, 1, 0, 0)),
            PointSwatch(solid_fill_style(1, 0, 0), radius=2),
            FillSwatch(solid_fill_style(1, 0, 0)),
        ):
            ctx = RasterContext(new_canvas(40, 40))
            swatch.render_legend(ctx, rect)
            box = _ink_box(ctx.canvas)
            self.assertIsNotNone(box, swatch)
            x0, y0, x1, y1 = box
            self.assertGreaterEqual(x0, 10)
            self.assertGreaterEqual(y0, 10)
            self.assertLessEqual(x1, 31)
            self.assertLessEqual(y1, 31)
            self.assertEqual(ctx.depth, 0)


class OutputTests(unittest.TestCase):
    def setUp(self) -> None:
        self.chart = fill_background(solid_fill_style(0.2, 0.4, 0.6), empty_renderable)

    def test_png_output_has_requested_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "out.png"
            render_to_png_file(self.chart, 32, 16, path)
            with Image.open(path) as img:
                self.assertEqual(img.size, (32, 16))
                self.assertEqual(img.format, "PNG")

    def test_png_render_is_pixel_aligned(self) -> None:
        # Half-pixel shift keeps a full-surface fill covering every pixel.
        surface = render_to_image(self.chart, 8, 8)
        self.assertTrue(np.all(surface.canvas[:, :, 3] == 255))

    def test_aligned_background_stays_inside_its_rect(self) -> None:
        red = fill_background(solid_fill_style(1, 0, 0), empty_renderable)
        surface = render_to_image(add_margins((10, 10, 10, 10), red), 40, 40)
        self.assertEqual(_ink_box(surface.canvas), (10, 10, 30, 30))

    def test_aligned_zero_width_background_paints_nothing(self) -> None:
        red = fill_background(solid_fill_style(1, 0, 0), empty_renderable)
        surface = render_to_image(add_margins((10, 10, 10, 30), red), 40, 40)
        self.assertIsNone(_ink_box(surface.canvas))

    def test_pdf_output_is_a_pdf(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "out.pdf"
            render_to_pdf_file(self.chart, 32, 16, path)
            self.assertTrue(path.read_bytes().startswith(b"%PDF"))

    def test_ps_output_is_postscript(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "out.eps"
            render_to_ps_file(self.chart, 32, 16, path)
            self.assertTrue(path.read_bytes().startswith(b"%!PS"))

    def test_unwritable_output_path_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing" / "out.png"
            with self.assertRaises(OSError):
                render_to_png_file(self.chart, 8, 8, path)

    def test_pdf_surface_collects_pages(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            surface = PDFSurface(Path(tmp) / "pages.pdf", 10, 10)
            surface.show_page()
            surface.show_page()
            self.assertEqual(surface.page_count, 2)
            surface.finish()
            with self.assertRaises(RuntimeError):
                surface.show_page()


if __name__ == "__main__":
    unittest.main()
