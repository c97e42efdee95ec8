"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import threading
from datetime import date

from calendar_window import CalendarWindow
from icon_gen import create_icon_image
from tray_icon import create_tray, refresh_tray, tray_tooltip

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cal_win = CalendarWindow()
    anchor = cal_win.view.anchor
    today = date.today()
    logger.info("Starting market calendar (anchor %s)", anchor.isoformat())

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_anchor() -> None:
        def _jump() -> None:
            cal_win.show()
            cal_win.go_anchor()
        cal_win.root.after(0, _jump)

    def on_settings() -> None:
        cal_win.root.after(0, cal_win.open_settings)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    tray = create_tray(
        create_icon_image(today, anchor), on_show, on_exit,
        on_anchor=on_anchor, on_settings=on_settings,
        tooltip=tray_tooltip(today, anchor),
    )

    # Anchor changes and midnight both alter what the icon shows
    def on_day_state_changed() -> None:
        refresh_tray(tray, cal_win.view.today(), cal_win.view.anchor)
    cal_win.on_day_state_changed = on_day_state_changed

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    # tkinter main loop on the main thread
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
