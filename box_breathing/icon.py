"""
Box breathing window/tray icon: a rounded square with the breath curve on it.
Run ``box-breathing --make-icon DIR`` to write icon.ico and icon.png.
"""
import os

from PIL import Image, ImageDraw

from box_breathing import phases

TEAL = (15, 118, 110)
DARK_TEAL = (13, 61, 61)
LIGHT_CYAN = (153, 246, 228)
AMBER = (251, 191, 36)
GRAY = (100, 110, 110)
LIGHT_GRAY = (160, 170, 170)
WHITE = (255, 255, 255)

ICON_SIZES = [16, 32, 48, 64, 128, 256]


def create_icon(size=64, paused=False):
    """Draw one icon; the paused variant is greyed out."""
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    s = size / 64  # designed at 64px
    w = max(1, int(2 * s))

    face = GRAY if paused else TEAL
    line = LIGHT_GRAY if paused else LIGHT_CYAN

    # ── Box ──
    m = int(4 * s)
    radius = max(2, int(10 * s))
    draw.rounded_rectangle([m + w, m + w, size - m + w - 1, size - m + w - 1],
                           radius=radius, fill=DARK_TEAL + (255,))
    draw.rounded_rectangle([m, m, size - m - 1, size - m - 1],
                           radius=radius, fill=face + (255,), outline=WHITE + (255,), width=w)

    # ── Breath curve across the box ──
    left, right = int(12 * s), size - int(12 * s)
    top, bottom = int(20 * s), size - int(20 * s)
    samples = [(i * phases.PHASE_SECONDS, phases.level(min(i * phases.PHASE_SECONDS,
                                                           phases.CYCLE_SECONDS - 0.0001)))
               for i in range(5)]
    pts = [(left + (o / phases.CYCLE_SECONDS) * (right - left),
            bottom - lvl * (bottom - top)) for o, lvl in samples]
    draw.line(pts, fill=line + (255,), width=max(1, int(3 * s)), joint="curve")

    # ── Marker on the hold plateau ──
    if not paused:
        r = max(1, int(4 * s))
        mx, my = pts[1][0] + (pts[2][0] - pts[1][0]) / 2, top
        draw.ellipse([mx - r, my - r, mx + r, my + r], fill=AMBER + (255,))
    return img


def generate_icon(out_dir="."):
    """Generate icon.ico and icon.png files."""
    images = [create_icon(s) for s in ICON_SIZES]
    # ICO: save largest first, append smaller; PIL requires this order
    images[-1].save(os.path.join(out_dir, "icon.ico"), format="ICO", append_images=images[:-1])
    images[-1].save(os.path.join(out_dir, "icon.png"), format="PNG")
    return [os.path.join(out_dir, name) for name in ("icon.ico", "icon.png")]
