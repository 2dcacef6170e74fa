"""
color.py — Color values and their PDF fill/stroke operators.
"""
import re
from dataclasses import dataclass

from pdf_writer import real_str


@dataclass(frozen=True)
class Gray:
    y: int


@dataclass(frozen=True)
class Gray16:
    y: int


@dataclass(frozen=True)
class CMYK:
    c: int
    m: int
    y: int
    k: int


@dataclass(frozen=True)
class RGBA:
    """8-bit color with straight (non-premultiplied) alpha."""
    r: int
    g: int
    b: int
    a: int = 255

    def rgba16(self) -> tuple[int, int, int]:
        """Premultiplied 16-bit red, green and blue."""
        def channel(v: int) -> int:
            return (v | v << 8) * self.a // 0xFF
        return channel(self.r), channel(self.g), channel(self.b)


@dataclass(frozen=True)
class ColorInfo:
    op: str
    params: tuple[float, ...]

    def pdf_code(self, fill: bool) -> str:
        op = self.op if fill else self.op.upper()
        return " ".join([real_str(p) for p in self.params] + [op])


def _params(max_value: int, *values: int) -> tuple[float, ...]:
    return tuple(v / max_value for v in values)


def make_color_info(color) -> ColorInfo:
    if isinstance(color, Gray):
        return ColorInfo("g", _params(0xFF, color.y))
    if isinstance(color, Gray16):
        return ColorInfo("g", _params(0xFFFF, color.y))
    if isinstance(color, CMYK):
        return ColorInfo("k", _params(0xFF, color.c, color.m, color.y, color.k))
    if isinstance(color, RGBA):
        return ColorInfo("rg", _params(0xFFFF, *color.rgba16()))
    raise TypeError(f"unsupported color type: {type(color).__name__}")


NAMED_COLORS = {
    "red": RGBA(255, 0, 0),
    "green": RGBA(0, 128, 0),
    "blue": RGBA(0, 0, 255),
    "black": Gray(0),
    "white": Gray(255),
    "gray": Gray(128),
    "orange": RGBA(255, 165, 0),
    "purple": RGBA(128, 0, 128),
    "cyan": CMYK(255, 0, 0, 0),
    "magenta": CMYK(0, 255, 0, 0),
    "yellow": CMYK(0, 0, 255, 0),
}

_HEX_RE = re.compile(r"#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")


def _byte(text: str) -> int:
    value = int(text)
    if not 0 <= value <= 255:
        raise ValueError(f"color component out of range: {value}")
    return value


def parse_color(text: str):
    """
    Parse a color from text.

    Accepted forms: "#f00", "#ff0000", "#ff000080", "gray:128",
    "cmyk:0,255,255,0" and the names in NAMED_COLORS.
    """
    s = text.strip().lower()
    if s in NAMED_COLORS:
        return NAMED_COLORS[s]

    m = _HEX_RE.fullmatch(s)
    if m:
        digits = m.group(1)
        if len(digits) == 3:
            digits = "".join(d * 2 for d in digits)
        values = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        return RGBA(*values)

    kind, _, rest = s.partition(":")
    try:
        if kind == "gray" and rest:
            return Gray(_byte(rest))
        if kind == "cmyk":
            parts = rest.split(",")
            if len(parts) == 4:
                return CMYK(*(_byte(p) for p in parts))
    except ValueError as e:
        raise ValueError(f"invalid color {text!r}: {e}") from None
    raise ValueError(f"invalid color {text!r}")
