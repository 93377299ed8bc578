from __future__ import annotations

import contextlib
import importlib.util
import io
from pathlib import Path
import sys
import tempfile
import unittest
from unittest import mock

from PIL import Image

MODULE_PATH = Path(__file__).resolve().parents[1] / "main.py"
SPEC = importlib.util.spec_from_file_location("tessera_cli_main", MODULE_PATH)
if SPEC is None or SPEC.loader is None:
    raise RuntimeError(f"failed to load module spec for {MODULE_PATH}")
MODULE = importlib.util.module_from_spec(SPEC)
sys.modules[SPEC.name] = MODULE
SPEC.loader.exec_module(MODULE)


def _run(*argv: str) -> str:
    out = io.StringIO()
    with mock.patch.object(sys, "argv", ["tessera", *argv]), contextlib.redirect_stdout(out):
        MODULE.main()
    return out.getvalue()


class FormatInferenceTests(unittest.TestCase):
    def test_format_follows_suffix(self) -> None:
        self.assertEqual(MODULE._format_for(Path("a.PNG"), None), "png")
        self.assertEqual(MODULE._format_for(Path("a.pdf"), None), "pdf")
        self.assertEqual(MODULE._format_for(Path("a.eps"), None), "ps")

    def test_explicit_format_wins(self) -> None:
        self.assertEqual(MODULE._format_for(Path("chart.out"), "pdf"), "pdf")

    def test_unknown_suffix_exits(self) -> None:
        with self.assertRaises(SystemExit):
            MODULE._format_for(Path("chart.svg"), None)


class CommandTests(unittest.TestCase):
    def test_labels_writes_png_of_requested_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "sheets" / "labels.png"
            printed = _run("labels", "--rotation", "45", "--out", str(out), "--width", "300", "--height", "240")
            self.assertEqual(printed.strip(), str(out))
            with Image.open(out) as img:
                self.assertEqual(img.size, (300, 240))

    def test_legend_writes_pdf(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "legend.pdf"
            _run("legend", "--margin", "12", "--plot-size", "30", "--font-size", "14", "--out", str(out))
            self.assertTrue(out.read_bytes().startswith(b"%PDF"))

    def test_legend_rejects_bad_style(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "legend.png"
            with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
                _run("legend", "--font-size", "0", "--out", str(out))
            self.assertFalse(out.exists())

    def test_rejects_non_positive_dimensions(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "labels.png"
            for flag in ("--width", "--height"):
                err = io.StringIO()
                with contextlib.redirect_stderr(err), self.assertRaises(SystemExit) as caught:
                    _run("labels", flag, "0", "--out", str(out))
                self.assertEqual(caught.exception.code, 2)
                self.assertIn("must be > 0", err.getvalue())
            self.assertFalse(out.exists())


if __name__ == "__main__":
    unittest.main()
