"""Rendu du badge rond affiché sur l'écran d'accueil."""

from __future__ import annotations

from PIL import Image, ImageDraw, ImageFont

DEFAULT_BADGE_COLOR = "#2563EB"
BADGE_TEXT_COLOR = "#FFFFFF"
FALLBACK_INITIAL = "?"


def initials(username: str) -> str:
    """Retourne au plus deux initiales en majuscules pour ``username``."""
    parts = [part for part in username.replace("_", " ").replace(".", " ").split() if part]
    if not parts:
        return FALLBACK_INITIAL
    if len(parts) == 1:
        return parts[0][0].upper()
    return (parts[0][0] + parts[1][0]).upper()


def render_initial_badge(
    username: str,
    size: int = 96,
    color: str = DEFAULT_BADGE_COLOR,
) -> Image.Image:
    """Dessine un disque coloré portant les initiales, transparent hors du cercle."""
    if size <= 0:
        raise ValueError("La taille du badge doit être positive.")

    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    drawer = ImageDraw.Draw(image)
    drawer.ellipse((0, 0, size - 1, size - 1), fill=color)

    text = initials(username)
    font = _load_font(size // 2)
    left, top, right, bottom = drawer.textbbox((0, 0), text, font=font)
    x = (size - (right - left)) / 2 - left
    y = (size - (bottom - top)) / 2 - top
    drawer.text((x, y), text, fill=BADGE_TEXT_COLOR, font=font)
    return image


def _load_font(point_size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    try:
        return ImageFont.truetype("DejaVuSans-Bold.ttf", point_size)
    except OSError:
        return ImageFont.load_default()
