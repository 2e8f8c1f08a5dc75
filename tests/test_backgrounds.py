import os
import tempfile
import unittest

from PIL import Image

from box_breathing import backgrounds
from box_breathing.backgrounds import (BACKGROUNDS, DEFAULT_BACKGROUND, BackgroundError,
                                       compose_backdrop, get_background, load_custom_background,
                                       render_background, thumbnail)


class TestCatalogue(unittest.TestCase):
    def test_meadow_is_default(self) -> None:
        self.assertEqual(DEFAULT_BACKGROUND, "meadow")
        self.assertEqual(BACKGROUNDS[0]["label"], "Sunny Meadow (default)")
        self.assertEqual([b["id"] for b in BACKGROUNDS],
                         ["meadow", "snowy-mountain", "beach", "austrian-countryside"])

    def test_lookup(self) -> None:
        self.assertEqual(get_background("beach")["label"], "Relaxing Beach View")
        self.assertEqual(get_background("nowhere")["id"], "meadow")


class TestRendering(unittest.TestCase):
    def test_every_scene_renders_at_size(self) -> None:
        for bg in BACKGROUNDS:
            img = render_background(bg["id"], (320, 200))
            self.assertEqual(img.size, (320, 200))
            self.assertEqual(img.mode, "RGB")
            # Not a flat fill
            extrema = img.getextrema()
            self.assertTrue(any(lo != hi for lo, hi in extrema), bg["id"])

    def test_rendering_is_deterministic(self) -> None:
        a = render_background("meadow", (120, 80))
        b = render_background("meadow", (120, 80))
        self.assertEqual(a.tobytes(), b.tobytes())

    def test_scenes_differ(self) -> None:
        imgs = {bg["id"]: thumbnail(bg["id"]).tobytes() for bg in BACKGROUNDS}
        self.assertEqual(len(set(imgs.values())), len(BACKGROUNDS))

    def test_thumbnail_size(self) -> None:
        self.assertEqual(thumbnail("beach").size, backgrounds.THUMB_SIZE)

    def test_dim_darkens(self) -> None:
        img = Image.new("RGB", (4, 4), (200, 200, 200))
        self.assertLess(backgrounds.dim(img, 0.5).getpixel((0, 0))[0], 200)

    def test_compose_backdrop_tints_panel_only(self) -> None:
        img = Image.new("RGB", (100, 100), (255, 255, 255))
        out = compose_backdrop(img, (20, 20, 80, 80), (0, 0, 0), alpha=255, radius=2)
        self.assertEqual(out.getpixel((50, 50)), (0, 0, 0))
        self.assertEqual(out.getpixel((5, 5)), (255, 255, 255))
        self.assertEqual(out.mode, "RGB")

    def test_hex_to_rgb(self) -> None:
        self.assertEqual(backgrounds.hex_to_rgb("#2e3440"), (46, 52, 64))


class TestCustomBackground(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_custom_image_cropped_to_cover(self) -> None:
        path = os.path.join(self.tmp.name, "wide.png")
        Image.new("RGB", (400, 100), (10, 120, 200)).save(path)
        img = load_custom_background(path, (200, 200))
        self.assertEqual(img.size, (200, 200))
        self.assertEqual(img.getpixel((100, 100)), (10, 120, 200))

    def test_unreadable_file_raises(self) -> None:
        path = os.path.join(self.tmp.name, "notes.png")
        with open(path, "w", encoding="utf-8") as f:
            f.write("not an image")
        with self.assertRaises(BackgroundError):
            load_custom_background(path, (50, 50))
        with self.assertRaises(ValueError):
            load_custom_background(os.path.join(self.tmp.name, "missing.jpg"), (50, 50))


if __name__ == "__main__":
    unittest.main()
