from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Literal, Mapping


Color = tuple[int, int, int, int]
FontWeight = Literal["normal", "bold"]
FontSlant = Literal["normal", "italic", "oblique"]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


def parse_hex_color(value: str) -> Color:
    """Parse `#RRGGBB` or `#RRGGBBAA` into an RGBA tuple."""

    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"color must be a hex string (#RRGGBB or #RRGGBBAA), got {value!r}")
    digits = value[1:]
    r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
    a = int(digits[6:8], 16) if len(digits) == 8 else 255
    return (r, g, b, a)


def rgba(r: float, g: float, b: float, a: float = 1.0) -> Color:
    """Colour from unit-interval channels."""

    return tuple(int(round(max(0.0, min(1.0, c)) * 255)) for c in (r, g, b, a))  # type: ignore[return-value]


def _check_color(name: str, color: Color) -> None:
    if len(color) != 4 or any(not isinstance(c, int) or c < 0 or c > 255 for c in color):
        raise ValueError(f"{name} must be an RGBA tuple of ints in [0, 255]")


@dataclass(frozen=True)
class FontStyle:
    family: str = "sans"
    size_px: float = 10.0
    weight: FontWeight = "normal"
    slant: FontSlant = "normal"
    color: Color = (0, 0, 0, 255)

    def __post_init__(self) -> None:
        if not self.family.strip():
            raise ValueError("FontStyle `family` must be non-empty")
        if self.size_px <= 0:
            raise ValueError("FontStyle `size_px` must be > 0")
        _check_color("FontStyle `color`", self.color)

    @property
    def face_name(self) -> str:
        """Family name qualified with weight and slant, as used for font file lookup."""

        parts = [self.family.strip()]
        if self.weight == "bold":
            parts.append("bold")
        if self.slant != "normal":
            parts.append(self.slant)
        return " ".join(parts)


def font_style(
    family: str,
    size_px: float,
    slant: FontSlant = "normal",
    weight: FontWeight = "normal",
) -> FontStyle:
    return FontStyle(family=family, size_px=size_px, weight=weight, slant=slant)


@dataclass(frozen=True)
class FillStyle:
    color: Color = (255, 255, 255, 255)

    def __post_init__(self) -> None:
        _check_color("FillStyle `color`", self.color)


def solid_fill_style(r: float, g: float, b: float, a: float = 1.0) -> FillStyle:
    return FillStyle(color=rgba(r, g, b, a))


@dataclass(frozen=True)
class LineStyle:
    width: float = 1.0
    color: Color = (0, 0, 0, 255)

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError("LineStyle `width` must be >= 0")
        _check_color("LineStyle `color`", self.color)


def solid_line(width: float, r: float, g: float, b: float, a: float = 1.0) -> LineStyle:
    return LineStyle(width=width, color=rgba(r, g, b, a))


DEFAULT_FONT_STYLE = FontStyle()


@dataclass(frozen=True)
class LegendStyle:
    """Legend label font, gap between label groups, and fixed swatch width."""

    label_style: FontStyle = DEFAULT_FONT_STYLE
    margin: float = 20.0
    plot_size: float = 20.0

    def __post_init__(self) -> None:
        if self.margin < 0:
            raise ValueError("LegendStyle `margin` must be >= 0")
        if self.plot_size < 0:
            raise ValueError("LegendStyle `plot_size` must be >= 0")


DEFAULT_LEGEND_STYLE = LegendStyle()


def validate_legend_style(overrides: Mapping[str, Any] | None = None) -> LegendStyle:
    """Merge overrides onto the default legend style.

    `label_style` may be a `FontStyle` or a mapping of `FontStyle` fields;
    colour fields inside it may be hex strings.
    """

    raw: dict[str, Any] = {
        "label_style": DEFAULT_LEGEND_STYLE.label_style,
        "margin": DEFAULT_LEGEND_STYLE.margin,
        "plot_size": DEFAULT_LEGEND_STYLE.plot_size,
    }
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown legend style key: {key}")
            raw[key] = value

    for key in ("margin", "plot_size"):
        if isinstance(raw[key], bool) or not isinstance(raw[key], (int, float)):
            raise ValueError(f"Legend style `{key}` must be a number")

    label_style = raw["label_style"]
    if isinstance(label_style, Mapping):
        fields = asdict(DEFAULT_FONT_STYLE)
        for key, value in label_style.items():
            if key not in fields:
                raise ValueError(f"Unknown font style key: {key}")
            fields[key] = parse_hex_color(value) if key == "color" and isinstance(value, str) else value
        label_style = FontStyle(**fields)
    elif not isinstance(label_style, FontStyle):
        raise ValueError("Legend style `label_style` must be a FontStyle or a mapping")

    return LegendStyle(label_style=label_style, margin=float(raw["margin"]), plot_size=float(raw["plot_size"]))
