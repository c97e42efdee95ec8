"""Tests for tray icon refresh; skipped when pystray has no desktop backend."""

from datetime import date
from types import SimpleNamespace

import pytest
from PIL import ImageColor

try:
    from tray_icon import refresh_tray, tray_tooltip
except Exception as exc:  # pystray picks its backend at import time
    pytest.skip(f"pystray unavailable: {exc}", allow_module_level=True)

from icon_gen import MARKET_BG


def test_tooltip_wording():
    assert tray_tooltip(date(2026, 2, 2)) == "Market Calendar – market day today"
    assert tray_tooltip(date(2026, 2, 3)) == "Market Calendar – next market day in 2 days"


def test_refresh_follows_new_anchor():
    tray = SimpleNamespace(icon=None, title="stale")

    refresh_tray(tray, date(2026, 2, 3), date(2026, 2, 2))
    assert tray.title.endswith("next market day in 2 days")
    assert tray.icon.getpixel((0, 0)) == (255, 255, 255, 255)

    refresh_tray(tray, date(2026, 2, 3), date(2026, 2, 3))
    assert tray.title.endswith("market day today")
    assert tray.icon.getpixel((0, 0)) == ImageColor.getrgb(MARKET_BG) + (255,)
