"""Entry point — glues pystray (daemon thread) with tkinter (main thread)."""

import logging
import os
import threading

from calendar_window import CalendarWindow
from icon_gen import create_icon_image
from log_setup import setup_logging
from planner import Planner
from settings import load_settings
from tray_icon import create_tray

logger = logging.getLogger(__name__)


def main() -> None:
    settings = load_settings()
    setup_logging(settings["log_level"], os.path.join(settings["data_dir"], "logs"))
    logger.info("Starting planner with data in %s", settings["data_dir"])

    planner = Planner.open(settings["data_dir"], yearly_view=settings["yearly_view"])
    cal_win = CalendarWindow(planner)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_yearly_plan() -> None:
        cal_win.root.after(0, cal_win.open_yearly_plan)

    def on_exit() -> None:
        def _quit() -> None:
            cal_win.persist_state()
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    tray = create_tray(create_icon_image(), on_show, on_exit,
                       on_yearly_plan=on_yearly_plan)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    cal_win.show()
    cal_win.root.mainloop()


if __name__ == "__main__":
    main()
