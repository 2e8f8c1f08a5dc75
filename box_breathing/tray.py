"""System tray icon with Play/Pause/Reset, running on its own thread."""
from __future__ import annotations

import threading
from typing import Any, Callable, Optional

from box_breathing.icon import create_icon


class BreathTray:
    """pystray icon whose menu actions are marshalled onto the tk thread."""

    def __init__(self, root, clock, on_open: Callable[[], None], on_quit: Callable[[], None]):
        self.root = root
        self.clock = clock
        self.on_open = on_open
        self.on_quit = on_quit
        self.icon: Optional[Any] = None
        self._shown_playing: Optional[bool] = None

    def start(self) -> bool:
        """Start the tray thread; returns False when no tray backend is usable."""
        try:
            import pystray
        except Exception as e:  # pystray picks a platform backend at import time
            print(f"  [!] No tray icon ({e}).")
            return False

        menu = pystray.Menu(
            pystray.MenuItem("Open", lambda icon, item: self.root.after(0, self.on_open),
                             default=True, visible=False),
            pystray.MenuItem(
                lambda item: "⏸  Pause" if self.clock.playing else "▶  Play",
                lambda icon, item: self.root.after(0, self.clock.toggle)),
            pystray.MenuItem("↺  Reset", lambda icon, item: self.root.after(0, self.clock.reset)),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Quit", lambda icon, item: self.root.after(0, self.on_quit)),
        )
        self.icon = pystray.Icon("box_breathing", create_icon(64, paused=True),
                                 "Box Breathing", menu)
        threading.Thread(target=self.icon.run, daemon=True).start()
        self.clock.add_listener(self._on_clock)
        return True

    def _on_clock(self, clock) -> None:
        # Frames arrive ~60 times a second; only touch the icon on a state change
        if clock.playing == self._shown_playing or self.icon is None:
            return
        self._shown_playing = clock.playing
        self.icon.icon = create_icon(64, paused=not clock.playing)
        self.icon.title = "Box Breathing" if clock.playing else "Box Breathing (paused)"

    def stop(self) -> None:
        if self.icon is not None:
            self.clock.remove_listener(self._on_clock)
            self.icon.stop()
            self.icon = None
