"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from datetime import date

from PIL import Image, ImageDraw, ImageFont

ICON_SIZE = 64
HEADER_COLOR = "#4F46E5"


def _fit_font(draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int):
    """Largest truetype font whose rendering of ``text`` fits the box."""
    font_size = 60
    font = None
    while font_size > 8:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= max_w and bbox[3] - bbox[1] <= max_h:
            break
        font_size -= 1
    return font


def create_icon_image(today: date | None = None) -> Image.Image:
    """Return a 64×64 RGBA page-a-day icon showing the day of month."""
    today = today or date.today()
    size = ICON_SIZE
    header_h = size // 4
    img = Image.new("RGBA", (size, size), "white")
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, size - 1, header_h), fill=HEADER_COLOR)
    draw.rectangle((0, 0, size - 1, size - 1), outline=HEADER_COLOR, width=2)

    text = str(today.day)
    body_h = size - header_h - 4
    font = _fit_font(draw, text, size - 8, body_h)

    # Centre the visible pixels in the area below the header
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = header_h + (size - header_h - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)

    return img
