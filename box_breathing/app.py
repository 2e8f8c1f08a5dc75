"""
Box Breathing — guided breathing window
━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Three screens: a home page, a background picker with the clinician
disclaimer, and the breathing program itself (graph, marker, controls).
"""
from __future__ import annotations

import platform
import tkinter as tk
from typing import Any, Callable, Optional

from PIL import ImageTk

from box_breathing import backgrounds, phases
from box_breathing.clock import BreathClock, TkScheduler
from box_breathing.config import get_theme, save_config, with_overrides
from box_breathing.graph import MARKER_RADIUS, GraphGeometry
from box_breathing.icon import create_icon
from box_breathing.screens import (HOME, PROGRAM, SETUP, ScreenFlow, cycles_text, overlay_visible,
                                   phase_hint, play_label)

# ─── Platform ────────────────────────────────────────────────
IS_MAC = platform.system() == "Darwin"
IS_WIN = platform.system() == "Windows"
FONT = "Helvetica Neue" if IS_MAC else "Segoe UI" if IS_WIN else "DejaVu Sans"

DISCLAIMER = (
    '"Only use under the guidance or support of your sports clinician or staff. '
    "Can start with 4 cycles, and if tolerating this up to 8. If you experience any "
    "lightheadedness or side effects in tolerating this please stop using the program "
    'and notify your team leadership"'
)


# ─── Tooltip Helper ───────────────────────────────────────────
class ToolTip:
    """Keyboard-shortcut hint shown while hovering a control."""
    def __init__(self, widget, text, theme):
        self.widget = widget
        self.text = text
        self.theme = theme
        self.tip = None
        widget.bind("<Enter>", self._show)
        widget.bind("<Leave>", self._hide)

    def _show(self, event=None):
        x = self.widget.winfo_rootx() + 25
        y = self.widget.winfo_rooty() + self.widget.winfo_height() + 5
        self.tip = tk.Toplevel(self.widget)
        self.tip.wm_overrideredirect(True)
        self.tip.wm_geometry(f"+{x}+{y}")
        tk.Label(self.tip, text=self.text, font=(FONT, 9), fg=self.theme["text"],
                 bg=self.theme["card"], relief="solid", borderwidth=1,
                 padx=6, pady=4).pack()

    def _hide(self, event=None):
        if self.tip:
            self.tip.destroy()
            self.tip = None


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
class BoxBreathingApp:

    def __init__(self, config: dict[str, Any], config_path: Optional[str] = None,
                 use_tray: bool = True, overrides: Optional[dict[str, Any]] = None):
        # self.config is what gets saved; self.settings adds the one-off overrides
        self.config = config
        self.config_path = config_path
        self.settings = with_overrides(config, overrides)
        settings = self.settings
        self.theme = get_theme(settings.get("theme", "nord"))

        self.root = tk.Tk()
        self.root.title("Box Breathing Program")
        self.root.configure(bg=self.theme["bg"])
        self._icon_photo = ImageTk.PhotoImage(create_icon(64))
        self.root.iconphoto(True, self._icon_photo)
        self.root.protocol("WM_DELETE_WINDOW", self._quit)

        self.geometry = GraphGeometry(settings["graph_width"], settings["graph_height"],
                                      settings["graph_padding"])
        # The reference curve only depends on the cycle constants
        self.samples = phases.waveform_samples(settings["sample_step"])

        self.win_w = max(900, self.geometry.width + 160)
        self.win_h = self.geometry.height + 330
        self._place_window()

        self.clock = BreathClock(TkScheduler(self.root, settings["frame_interval_ms"]))
        self.clock.add_listener(self._on_clock)

        self.flow = ScreenFlow(self.clock)
        self.background_id = settings.get("background", backgrounds.DEFAULT_BACKGROUND)
        self._frame: Optional[tk.Widget] = None
        self._thumbs: list[ImageTk.PhotoImage] = []  # prevent GC of PhotoImages
        self._cards: dict[str, tk.Frame] = {}
        self._backdrop_photo = None
        self._canvas = None
        self._play_btn = None

        self.root.bind("<space>", lambda e: self._key(self.clock.toggle))
        self.root.bind("<Key-r>", lambda e: self._key(self.clock.reset))
        self.root.bind("<Escape>", lambda e: self._key(self._back_to_selection))

        self.tray = None
        if use_tray and settings.get("show_tray", True):
            from box_breathing.tray import BreathTray
            self.tray = BreathTray(self.root, self.clock, on_open=self._raise, on_quit=self._quit)
            if not self.tray.start():
                self.tray = None

        self._print_banner()
        self.show_home()

    def run(self) -> None:
        self.root.mainloop()
        try:
            self.root.destroy()
        except tk.TclError:
            pass

    # ━━━ Window ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _place_window(self) -> None:
        w, h = self.win_w, self.win_h
        sw, sh = self.root.winfo_screenwidth(), self.root.winfo_screenheight()
        pos = self.config.get("window_position")
        if pos:
            x = max(0, min(int(pos[0]), sw - w))
            y = max(0, min(int(pos[1]), sh - h))
        else:
            x, y = (sw - w) // 2, (sh - h) // 2
        self.root.geometry(f"{w}x{h}+{x}+{y}")
        self.root.resizable(False, False)

    def _raise(self) -> None:
        self.root.deiconify()
        self.root.lift()
        self.root.focus_force()

    def _quit(self) -> None:
        self.clock.reset()
        try:
            self.config["window_position"] = [self.root.winfo_x(), self.root.winfo_y()]
        except tk.TclError:
            pass
        save_config(self.config, self.config_path)
        if self.tray:
            self.tray.stop()
        self.root.quit()

    def _print_banner(self) -> None:
        try:
            bg = self._background_label(self.background_id)
            print()
            print("  +-----------------------------------------------+")
            print("  |           Box Breathing -- Program             |")
            print("  +-----------------------------------------------+")
            for name, _, _ in phases.PHASES:
                print(f"  |  {name:<10s} {phases.PHASE_SECONDS:>3d} s                            |")
            print("  +-----------------------------------------------+")
            print(f"  |  Cycle: {phases.CYCLE_SECONDS} s   Start with {self.settings['recommended_cycles']}, "
                  f"up to {self.settings['max_cycles']} cycles  |")
            print(f"  |  Background: {bg:<33s}|")
            print("  +-----------------------------------------------+")
            print("  Space: play/pause   R: reset   Esc: change background")
            print()
        except (UnicodeEncodeError, OSError):
            pass  # consoles that can't print

    # ━━━ Screens ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def _switch(self, screen: str) -> tk.Frame:
        """Tear down the current screen and return a fresh container frame."""
        if self._frame is not None:
            self._frame.destroy()
        self._canvas = None
        self._play_btn = None
        self.flow.go(screen)
        frame = tk.Frame(self.root, bg=self.theme["bg"])
        frame.pack(fill="both", expand=True)
        self._frame = frame
        return frame

    def _btn(self, p: tk.Widget, text: str, bg: str, cmd: Callable, bold: bool = False,
             size: int = 10) -> tk.Button:
        wt = "bold" if bold else "normal"
        return tk.Button(p, text=text, font=(FONT, size, wt), bg=bg, fg=self.theme["text"],
                         activebackground=self.theme["card_sel"], relief="flat",
                         padx=18, pady=5, cursor="hand2", takefocus=0, command=cmd)

    def _key(self, action: Callable[[], None]) -> None:
        if self.flow.screen == PROGRAM:
            action()

    # ── Home ─────────────────────────────────────────────
    def show_home(self) -> None:
        t = self.theme
        f = self._switch(HOME)
        cf = tk.Frame(f, bg=t["bg"])
        cf.place(relx=0.5, rely=0.45, anchor="center")
        tk.Label(cf, text="Performance Recovery Hub", font=(FONT, 26, "bold"),
                 fg=t["text"], bg=t["bg"]).pack(pady=(0, 14))
        tk.Label(cf, text="Add this breathing module to your home screen workflow\n"
                          "for sports and motion analysis sessions.",
                 font=(FONT, 12), fg=t["text_dim"], bg=t["bg"], justify="center").pack(pady=(0, 24))
        self._btn(cf, "  Open Box Breathing Program  ", t["btn_pri"], self.show_setup,
                  bold=True, size=12).pack()

    # ── Setup ────────────────────────────────────────────
    def _background_choices(self) -> list[dict[str, str]]:
        choices = list(backgrounds.BACKGROUNDS)
        if self.settings.get("custom_background_path"):
            choices.append(backgrounds.CUSTOM_BACKGROUND)
        return choices

    def _background_label(self, bg_id: str) -> str:
        if bg_id == backgrounds.CUSTOM_BACKGROUND["id"]:
            return backgrounds.CUSTOM_BACKGROUND["label"]
        return backgrounds.get_background(bg_id)["label"]

    def _thumbnail(self, bg_id: str):
        if bg_id == backgrounds.CUSTOM_BACKGROUND["id"]:
            try:
                return backgrounds.load_custom_background(
                    self.settings["custom_background_path"], backgrounds.THUMB_SIZE)
            except backgrounds.BackgroundError as e:
                print(f"  [!] {e}")
                return None
        return backgrounds.thumbnail(bg_id)

    def show_setup(self) -> None:
        t = self.theme
        f = self._switch(SETUP)
        tk.Label(f, text="Choose a calming background", font=(FONT, 22, "bold"),
                 fg=t["text"], bg=t["bg"]).pack(pady=(28, 6))
        tk.Label(f, text="The meadow image is pre-selected as the standard graph background.",
                 font=(FONT, 11), fg=t["text_dim"], bg=t["bg"]).pack(pady=(0, 18))

        grid = tk.Frame(f, bg=t["bg"])
        grid.pack()
        self._thumbs = []
        self._cards = {}
        col = 0
        for bg in self._background_choices():
            img = self._thumbnail(bg["id"])
            if img is None:
                continue
            photo = ImageTk.PhotoImage(img)
            self._thumbs.append(photo)
            card = tk.Frame(grid, bg=t["card"], padx=6, pady=6, cursor="hand2",
                            highlightthickness=2, highlightbackground=t["card"])
            card.grid(row=col // 3, column=col % 3, padx=8, pady=8)
            pic = tk.Label(card, image=photo, bg=t["card"])
            pic.pack()
            cap = tk.Label(card, text=bg["label"], font=(FONT, 9), fg=t["text"], bg=t["card"],
                           wraplength=backgrounds.THUMB_SIZE[0])
            cap.pack(pady=(4, 0))
            for widget in (card, pic, cap):
                widget.bind("<Button-1>", lambda e, bg_id=bg["id"]: self._select_background(bg_id))
            self._cards[bg["id"]] = card
            col += 1
        if self.background_id not in self._cards:
            self.background_id = backgrounds.DEFAULT_BACKGROUND
        self._highlight_selected()

        tk.Label(f, text=DISCLAIMER, font=(FONT, 10, "italic"), fg=t["text_dim"], bg=t["bg"],
                 wraplength=self.win_w - 160, justify="center").pack(pady=(18, 18))

        bf = tk.Frame(f, bg=t["bg"])
        bf.pack()
        self._btn(bf, "Back", t["btn_sec"], self.show_home).pack(side="left", padx=6)
        self._btn(bf, "Start Box Breathing", t["btn_pri"], self.show_program,
                  bold=True).pack(side="left", padx=6)

    def _select_background(self, bg_id: str) -> None:
        self.background_id = bg_id
        self._highlight_selected()
        if self.settings.get("remember_background", True):
            self.config["background"] = bg_id
            save_config(self.config, self.config_path)

    def _highlight_selected(self) -> None:
        t = self.theme
        for bg_id, card in self._cards.items():
            selected = bg_id == self.background_id
            card.configure(highlightbackground=t["accent2"] if selected else t["card"],
                           bg=t["card_sel"] if selected else t["card"])

    # ── Program ──────────────────────────────────────────
    def _graph_origin(self) -> tuple[int, int]:
        return (self.win_w - self.geometry.width) // 2, 175

    def _backdrop(self):
        size = (self.win_w, self.win_h)
        img = None
        if self.background_id == backgrounds.CUSTOM_BACKGROUND["id"]:
            try:
                img = backgrounds.load_custom_background(self.settings["custom_background_path"], size)
            except backgrounds.BackgroundError as e:
                print(f"  [!] {e}. Using the meadow.")
        if img is None:
            img = backgrounds.render_background(self.background_id, size)
        gx, gy = self._graph_origin()
        panel = (gx - 30, 20, gx + self.geometry.width + 30, self.win_h - 20)
        return backgrounds.compose_backdrop(backgrounds.dim(img, 0.2), panel,
                                            backgrounds.hex_to_rgb(self.theme["bg"]))

    def show_program(self) -> None:
        t = self.theme
        f = self._switch(PROGRAM)
        c = tk.Canvas(f, width=self.win_w, height=self.win_h, highlightthickness=0, bg=t["bg"])
        c.pack(fill="both", expand=True)
        self._canvas = c

        self._backdrop_photo = ImageTk.PhotoImage(self._backdrop())
        c.create_image(0, 0, image=self._backdrop_photo, anchor="nw")

        cx = self.win_w // 2
        c.create_text(cx, 55, text="Box Breathing", font=(FONT, 22, "bold"), fill=t["text"])
        self._phase_id = c.create_text(cx, 105, text="", font=(FONT, 30, "bold"), fill=t["accent2"])
        self._count_id = c.create_text(cx, 142, text="", font=(FONT, 11), fill=t["text_dim"])

        gx, gy = self._graph_origin()
        g = self.geometry
        c.create_rectangle(gx, gy, gx + g.width, gy + g.height, fill=t["graph_bg"], outline="")
        self._cycles_id = c.create_text(gx + g.width - 10, gy + 14, text="", anchor="e",
                                        font=(FONT, 10, "bold"), fill=t["text"])
        for x0, y0, x1, y1 in g.axes():
            c.create_line(gx + x0, gy + y0, gx + x1, gy + y1, fill=t["text_mut"], width=2)
        for x, y, label in g.axis_labels():
            c.create_text(gx + x, gy + y, text=label, font=(FONT, 10), fill=t["text_dim"])
        coords = g.polyline(self.samples)
        shifted = [v + (gx if i % 2 == 0 else gy) for i, v in enumerate(coords)]
        c.create_line(*shifted, fill=t["wave"], width=3)
        self._marker_id = c.create_oval(0, 0, MARKER_RADIUS * 2, MARKER_RADIUS * 2,
                                        fill=t["marker"], outline=t["text"], width=2)

        self._overlay_btn = self._btn(c, "  ▶  Play  ", t["btn_pri"], self.clock.play,
                                      bold=True, size=16)
        self._overlay_id = c.create_window(gx + g.width // 2, gy + g.height // 2,
                                           window=self._overlay_btn)

        ctrl = tk.Frame(c, bg=t["bg"])
        self._play_btn = self._btn(ctrl, "Play", t["btn_sec"], self.clock.toggle)
        self._play_btn.pack(side="left", padx=6)
        ToolTip(self._play_btn, "Space", t)
        reset_btn = self._btn(ctrl, "Reset", t["btn_sec"], self.clock.reset)
        reset_btn.pack(side="left", padx=6)
        ToolTip(reset_btn, "R", t)
        change_btn = self._btn(ctrl, "Change Background", t["btn_sec"], self._back_to_selection)
        change_btn.pack(side="left", padx=6)
        ToolTip(change_btn, "Esc", t)
        c.create_window(cx, gy + g.height + 45, window=ctrl)

        self._on_clock(self.clock)

    def _back_to_selection(self) -> None:
        self.clock.reset()
        self.show_setup()

    def _on_clock(self, clock: BreathClock) -> None:
        """Redraw the program screen from the clock's current state."""
        c = self._canvas
        if self.flow.screen != PROGRAM or c is None:
            return
        gx, gy = self._graph_origin()
        offset = clock.cycle_offset()
        x0, y0, x1, y1 = self.geometry.marker_box(offset)
        try:
            c.coords(self._marker_id, gx + x0, gy + y0, gx + x1, gy + y1)
            c.itemconfigure(self._phase_id, text=clock.current_instruction())
            c.itemconfigure(self._count_id, text=phase_hint(clock))
            c.itemconfigure(self._cycles_id, text=cycles_text(
                clock.completed_cycles(), self.settings["recommended_cycles"],
                self.settings["max_cycles"]))
            c.itemconfigure(self._overlay_id, state="normal" if overlay_visible(clock) else "hidden")
            self._play_btn.configure(text=play_label(clock))
        except tk.TclError:
            pass  # window closed under a pending frame

