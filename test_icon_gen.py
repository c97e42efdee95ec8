"""Tests for the tray icon image."""

from datetime import date

from PIL import ImageColor

from icon_gen import MARKET_BG, create_icon_image


def test_icon_size_and_mode():
    img = create_icon_image(date(2026, 2, 3))
    assert img.size == (64, 64)
    assert img.mode == "RGBA"


def test_market_day_background():
    img = create_icon_image(date(2026, 2, 5))
    assert img.getpixel((0, 0)) == ImageColor.getrgb(MARKET_BG) + (255,)


def test_plain_day_background():
    img = create_icon_image(date(2026, 2, 4))
    assert img.getpixel((0, 0)) == (255, 255, 255, 255)


def test_day_number_is_drawn():
    img = create_icon_image(date(2026, 2, 4))
    colors = {img.getpixel((x, y)) for x in range(64) for y in range(64)}
    assert len(colors) > 1
