"""Cantina theme for Mexico."""

from src.ui.themes.animations import (
    load_css,
    render_death_match_banner,
    render_loser_animation,
    render_special_roll_banner,
)

__all__ = [
    "load_css",
    "render_death_match_banner",
    "render_loser_animation",
    "render_special_roll_banner",
]
