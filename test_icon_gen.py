from datetime import date

from icon_gen import ICON_SIZE, create_icon_image


def test_icon_is_square_rgba():
    img = create_icon_image(date(2024, 5, 15))
    assert img.size == (ICON_SIZE, ICON_SIZE)
    assert img.mode == "RGBA"


def test_icon_header_uses_accent_colour():
    img = create_icon_image(date(2024, 5, 1))
    assert img.getpixel((ICON_SIZE // 2, 4))[:3] == (0x4F, 0x46, 0xE5)
