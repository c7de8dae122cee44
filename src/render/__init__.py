"""Card rendering: color themes, layout geometry and the PNG renderer."""

from src.render.card_renderer import CANVAS_HEIGHT, CANVAS_WIDTH, render_card, render_card_image
from src.render.theme import THEMES, RenderConfig

__all__ = ["CANVAS_HEIGHT", "CANVAS_WIDTH", "RenderConfig", "THEMES", "render_card", "render_card_image"]
