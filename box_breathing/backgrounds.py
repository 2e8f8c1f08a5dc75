"""
Calming background scenes for the breathing graph.

Scenes are painted with Pillow so the app works offline; a user image file
can be offered as an extra choice.
"""
from __future__ import annotations

import random

from PIL import Image, ImageDraw, ImageEnhance, ImageFilter, ImageOps

BACKGROUNDS = [
    {"id": "meadow", "label": "Sunny Meadow (default)"},
    {"id": "snowy-mountain", "label": "Pristine Snowy Mountainside"},
    {"id": "beach", "label": "Relaxing Beach View"},
    {"id": "austrian-countryside", "label": "Austrian Countryside"},
]
DEFAULT_BACKGROUND = BACKGROUNDS[0]["id"]
CUSTOM_BACKGROUND = {"id": "custom", "label": "Custom image"}

THUMB_SIZE = (160, 100)


class BackgroundError(ValueError):
    """A custom background image could not be read."""


def get_background(bg_id: str) -> dict[str, str]:
    """Catalogue entry for ``bg_id``; unknown ids fall back to the default scene."""
    for bg in BACKGROUNDS:
        if bg["id"] == bg_id:
            return bg
    return BACKGROUNDS[0]


# ─── Painting helpers ────────────────────────────────────────
def _gradient(size, top, bottom) -> Image.Image:
    """Vertical two-colour gradient."""
    w, h = size
    img = Image.new("RGB", size, top)
    draw = ImageDraw.Draw(img)
    for y in range(h):
        t = y / max(1, h - 1)
        color = tuple(int(a + (b - a) * t) for a, b in zip(top, bottom))
        draw.line([(0, y), (w, y)], fill=color)
    return img


def _hill(draw, w, h, cx, cy, rx, ry, fill):
    draw.ellipse([(cx - rx) * w, (cy - ry) * h, (cx + rx) * w, (cy + ry) * h], fill=fill)


def _mountain(draw, w, h, left, peak_x, peak_y, right, base_y, fill, snow=None):
    """Triangle mountain in fractional coordinates, optionally with a snow cap."""
    pts = [(left * w, base_y * h), (peak_x * w, peak_y * h), (right * w, base_y * h)]
    draw.polygon(pts, fill=fill)
    if snow:
        cap = 0.3  # fraction of the height covered by snow
        cap_y = peak_y + (base_y - peak_y) * cap
        lx = peak_x + (left - peak_x) * cap
        rx = peak_x + (right - peak_x) * cap
        draw.polygon([(lx * w, cap_y * h), (peak_x * w, peak_y * h), (rx * w, cap_y * h)],
                     fill=snow)


def _sun(draw, w, h, cx, cy, r, fill):
    rr = r * min(w, h)
    draw.ellipse([cx * w - rr, cy * h - rr, cx * w + rr, cy * h + rr], fill=fill)


# ─── Scenes ──────────────────────────────────────────────────
def _paint_meadow(size) -> Image.Image:
    w, h = size
    img = _gradient(size, (96, 165, 250), (191, 219, 254))
    draw = ImageDraw.Draw(img)
    _sun(draw, w, h, 0.82, 0.18, 0.08, (253, 224, 71))
    _hill(draw, w, h, 0.2, 0.85, 0.6, 0.35, (101, 163, 13))
    _hill(draw, w, h, 0.85, 0.9, 0.55, 0.3, (77, 124, 15))
    draw.rectangle([0, 0.8 * h, w, h], fill=(132, 204, 22))
    rng = random.Random(7)
    for _ in range(max(20, (w * h) // 4000)):
        x, y = rng.random() * w, (0.8 + rng.random() * 0.2) * h
        r = max(1, w // 320)
        color = rng.choice([(254, 240, 138), (252, 165, 165), (255, 255, 255)])
        draw.ellipse([x - r, y - r, x + r, y + r], fill=color)
    return img


def _paint_snowy_mountain(size) -> Image.Image:
    w, h = size
    img = _gradient(size, (147, 197, 253), (241, 245, 249))
    draw = ImageDraw.Draw(img)
    _mountain(draw, w, h, -0.2, 0.25, 0.25, 0.7, 0.8, (100, 116, 139), (248, 250, 252))
    _mountain(draw, w, h, 0.3, 0.7, 0.15, 1.2, 0.8, (71, 85, 105), (255, 255, 255))
    _mountain(draw, w, h, 0.1, 0.45, 0.45, 0.85, 0.85, (148, 163, 184), (241, 245, 249))
    draw.rectangle([0, 0.78 * h, w, h], fill=(241, 245, 249))
    return img


def _paint_beach(size) -> Image.Image:
    w, h = size
    img = _gradient(size, (56, 189, 248), (224, 242, 254))
    draw = ImageDraw.Draw(img)
    _sun(draw, w, h, 0.5, 0.42, 0.1, (254, 215, 170))
    sea = _gradient((w, int(0.25 * h) + 1), (14, 116, 144), (45, 212, 191))
    img.paste(sea, (0, int(0.5 * h)))
    for i in range(4):
        y = (0.56 + i * 0.05) * h
        draw.line([(0.1 * w + i * 0.07 * w, y), (0.9 * w - i * 0.05 * w, y)],
                  fill=(204, 251, 241), width=max(1, h // 200))
    draw.rectangle([0, 0.75 * h, w, h], fill=(253, 230, 138))
    _hill(draw, w, h, 0.5, 0.77, 0.7, 0.04, (254, 243, 199))
    return img


def _paint_austrian_countryside(size) -> Image.Image:
    w, h = size
    img = _gradient(size, (125, 211, 252), (240, 249, 255))
    draw = ImageDraw.Draw(img)
    _mountain(draw, w, h, -0.1, 0.2, 0.2, 0.55, 0.6, (148, 163, 184), (255, 255, 255))
    _mountain(draw, w, h, 0.35, 0.6, 0.12, 0.9, 0.6, (120, 136, 160), (255, 255, 255))
    _mountain(draw, w, h, 0.7, 0.92, 0.28, 1.2, 0.6, (148, 163, 184), (248, 250, 252))
    _hill(draw, w, h, 0.25, 0.8, 0.55, 0.28, (74, 222, 128))
    _hill(draw, w, h, 0.8, 0.85, 0.5, 0.3, (34, 197, 94))
    draw.rectangle([0, 0.88 * h, w, h], fill=(22, 163, 74))
    # Farmhouse with a red roof
    hx, hy, hw = 0.62 * w, 0.66 * h, 0.06 * w
    draw.rectangle([hx, hy, hx + hw, hy + hw * 0.7], fill=(254, 252, 232))
    draw.polygon([(hx - hw * 0.15, hy), (hx + hw / 2, hy - hw * 0.5), (hx + hw * 1.15, hy)],
                 fill=(185, 28, 28))
    return img


_PAINTERS = {
    "meadow": _paint_meadow,
    "snowy-mountain": _paint_snowy_mountain,
    "beach": _paint_beach,
    "austrian-countryside": _paint_austrian_countryside,
}


def render_background(bg_id: str, size: tuple[int, int]) -> Image.Image:
    """Paint the scene for ``bg_id`` at ``size``; unknown ids paint the default."""
    painter = _PAINTERS.get(get_background(bg_id)["id"])
    img = painter(size)
    return img.filter(ImageFilter.GaussianBlur(radius=max(0.5, min(size) / 400)))


def thumbnail(bg_id: str, size: tuple[int, int] = THUMB_SIZE) -> Image.Image:
    return _PAINTERS[get_background(bg_id)["id"]](size)


def load_custom_background(path: str, size: tuple[int, int]) -> Image.Image:
    """Open a user image and crop it to cover ``size``."""
    try:
        with Image.open(path) as src:
            img = src.convert("RGB")
    except (OSError, ValueError) as e:
        raise BackgroundError(f"cannot read background image {path!r}: {e}") from e
    return ImageOps.fit(img, size, Image.LANCZOS)


def dim(img: Image.Image, amount: float = 0.35) -> Image.Image:
    """Darken a scene so the graph and text stay readable on top of it."""
    return ImageEnhance.Brightness(img).enhance(1.0 - amount)


def compose_backdrop(img: Image.Image, panel: tuple[int, int, int, int],
                     color: tuple[int, int, int], alpha: int = 190,
                     radius: int = 18) -> Image.Image:
    """Lay a translucent rounded panel over ``img`` (tk canvases have no alpha)."""
    base = img.convert("RGBA")
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    ImageDraw.Draw(layer).rounded_rectangle(panel, radius=radius, fill=color + (alpha,))
    return Image.alpha_composite(base, layer).convert("RGB")


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))
