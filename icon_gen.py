"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

from calendar_logic import ANCHOR_DATE, is_market_day

MARKET_BG = "#2E7D32"
PLAIN_BG = "white"


def create_icon_image(today: date | None = None,
                      anchor: date = ANCHOR_DATE) -> Image.Image:
    """Return a 64×64 RGBA image with today's day number.

    The background is green on market days, white otherwise.
    """
    size = 64
    if today is None:
        today = date.today()
    market = is_market_day(today, anchor)
    img = Image.new("RGBA", (size, size), MARKET_BG if market else PLAIN_BG)
    draw = ImageDraw.Draw(img)
    text = str(today.day)

    # Find the largest font size that fits the icon
    font_size = 120
    font = None
    while font_size > 10:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            font = ImageFont.load_default()
            break
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= size and bbox[3] - bbox[1] <= size:
            break
        font_size -= 1

    # Centre the actual visible pixels (compensate for font metric offsets)
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = (size - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="white" if market else "black", font=font)

    return img
