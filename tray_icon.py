"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from calendar_logic import annotate


def tray_title(today: date | None = None) -> str:
    """Hover text: today's date and its lunar label."""
    today = today or date.today()
    info = annotate(today.year, today.month - 1, today.day)
    title = f"Lunar Planner – {today.isoformat()} {info.lunar_label}"
    if info.holiday_status is not None:
        title += f" ({info.holiday_status.name})"
    return title


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_yearly_plan: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Planner", lambda _icon, _item: on_show(), default=True),
    ]
    if on_yearly_plan is not None:
        items.append(MenuItem("Yearly Plan", lambda _icon, _item: on_yearly_plan()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    return pystray.Icon("lunar-planner", icon_image, tray_title(), Menu(*items))
