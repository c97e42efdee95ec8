"""System-tray icon setup via pystray."""

from datetime import date
from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from calendar_logic import ANCHOR_DATE, market_status_text
from icon_gen import create_icon_image


def tray_tooltip(today: date, anchor: date = ANCHOR_DATE) -> str:
    """Return the hover text, e.g. "Market Calendar – market day today"."""
    return f"Market Calendar – {market_status_text(today, anchor)}"


def refresh_tray(tray: pystray.Icon, today: date, anchor: date = ANCHOR_DATE) -> None:
    """Redraw the icon and hover text for *today* under *anchor*."""
    tray.icon = create_icon_image(today, anchor)
    tray.title = tray_tooltip(today, anchor)


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_anchor: Callable[[], None] | None = None,
    on_settings: Callable[[], None] | None = None,
    tooltip: str = "Market Calendar",
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
    ]
    if on_anchor is not None:
        items.append(MenuItem("Jump to Anchor", lambda _icon, _item: on_anchor()))
    if on_settings is not None:
        items.append(MenuItem("Settings", lambda _icon, _item: on_settings()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    return pystray.Icon("market-calendar", icon_image, tooltip, Menu(*items))
