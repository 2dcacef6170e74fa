"""
artwork.py — Content-stream fragments for the snowman picture.

All paths are drawn in a unit square; transform_code() maps that square
onto the page.
"""
from color import ColorInfo
from pdf_writer import real_str

BODY_CODE = """\
0.5 0.72 m 0.64 0.72 0.76 0.65 0.76 0.55 c
0.76 0.51 0.72 0.47 0.67 0.44 c 0.79 0.41 0.84 0.32 0.84 0.25 c
0.84 0.13 0.75 0.08 0.68 0.08 c 0.32 0.08 l
0.25 0.08 0.16 0.13 0.16 0.25 c 0.16 0.32 0.21 0.41 0.33 0.44 c
0.28 0.47 0.24 0.51 0.24 0.55 c 0.24 0.65 0.36 0.72 0.5 0.72 c s"""

MOUTH_CODE = "0.40 0.48 m 0.45 0.45 0.55 0.45 0.60 0.48 c S"

HAT_CODE = """\
0.58 0.90 m 0.77 0.81 l 0.74 0.61 l 0.66 0.60 0.50 0.66 0.46 0.72 c
0.58 0.90 l b"""

ARMS_CODE = """\
0.20 0.31 m 0.19 0.33 0.14 0.41 0.13 0.42 c
0.12 0.43 0.10 0.43 0.07 0.44 c 0.04 0.46 0.06 0.46 0.08 0.46 c
0.09 0.46 0.11 0.44 0.12 0.44 c 0.14 0.46 0.14 0.47 0.15 0.49 c
0.16 0.51 0.16 0.49 0.16 0.48 c 0.16 0.46 0.14 0.44 0.15 0.43 c
0.16 0.42 0.21 0.35 0.22 0.33 c 0.23 0.31 0.21 0.30 0.20 0.31 c b
0.80 0.31 m 0.81 0.33 0.86 0.41 0.87 0.42 c
0.88 0.43 0.90 0.43 0.93 0.44 c 0.96 0.46 0.94 0.46 0.92 0.46 c
0.91 0.46 0.89 0.44 0.88 0.44 c 0.86 0.46 0.86 0.47 0.85 0.49 c
0.84 0.51 0.84 0.49 0.84 0.48 c 0.84 0.46 0.86 0.44 0.85 0.43 c
0.84 0.42 0.79 0.35 0.78 0.33 c 0.77 0.31 0.79 0.30 0.80 0.31 c b"""

MUFFLER_CODE = """\
0.27 0.48 m 0.42 0.38 0.58 0.38 0.73 0.48 c
0.75 0.46 0.76 0.44 0.77 0.41 c 0.77 0.39 0.75 0.37 0.73 0.36 c
0.74 0.33 0.74 0.31 0.76 0.26 c 0.75 0.25 0.72 0.24 0.66 0.23 c
0.66 0.27 0.65 0.30 0.63 0.34 c 0.42 0.30 0.32 0.35 0.24 0.41 c
0.25 0.45 0.26 0.47 0.27 0.48 c b"""

LINE_STYLE = "0 G 0 g 1 j 1 J 0.01389 w"

# Bezier control distance for a quarter circle of radius 1.
_KAPPA = 0.55228475


def _num(v: float) -> str:
    return f"{v:.4f}".rstrip("0").rstrip(".")


def circle(cx: float, cy: float, rx: float, ry: float, op: str) -> str:
    """Return an ellipse path painted with op, one segment per line."""
    a = _KAPPA
    rows = [
        (cx + rx, cy, "m"),
        (cx + rx, cy + a * ry, cx + a * rx, cy + ry, cx, cy + ry, "c"),
        (cx - a * rx, cy + ry, cx - rx, cy + a * ry, cx - rx, cy, "c"),
        (cx - rx, cy - a * ry, cx - a * rx, cy - ry, cx, cy - ry, "c"),
        (cx + a * rx, cy - ry, cx + rx, cy - a * ry, cx + rx, cy, "c", op),
    ]
    return "".join(
        " ".join(v if isinstance(v, str) else _num(v) for v in row) + "\n"
        for row in rows
    )


EYES_CODE = circle(0.40, 0.56, 0.02, 0.03, "f") + circle(0.60, 0.56, 0.02, 0.03, "f")

BUTTONS_CODE = circle(0.50, 0.16, 0.03, 0.03, "b") + circle(0.50, 0.26, 0.03, 0.03, "b")

SNOW_CODE = "".join(
    circle(x, y, 0.04, 0.04, "s")
    for x, y in [
        (0.07, 0.28), (0.08, 0.68), (0.13, 0.55), (0.23, 0.76), (0.42, 0.89),
        (0.74, 0.89), (0.88, 0.73), (0.92, 0.53), (0.94, 0.23),
    ]
)


def essential_code(muffler: ColorInfo) -> str:
    """Return the snowman drawing with the muffler painted in the given color."""
    return "".join([
        LINE_STYLE + "\n",
        BODY_CODE + "\n",
        EYES_CODE,
        MOUTH_CODE + "\n",
        HAT_CODE + "\n",
        ARMS_CODE + "\n",
        BUTTONS_CODE,
        SNOW_CODE,
        f"{muffler.pdf_code(False)} {muffler.pdf_code(True)}\n",
        MUFFLER_CODE + "\n",
    ])


def transform_code(width: float, height: float, scale: float) -> tuple[str, float]:
    """
    Return the "cm" operator that centers the unit square on the page,
    and the resulting edge length in points.
    """
    size = max(width, height) * scale
    ox, oy = (width - size) / 2, (height - size) / 2
    s = f"{real_str(size)} 0 0 {real_str(size)} {real_str(ox)} {real_str(oy)} cm"
    return s, size
