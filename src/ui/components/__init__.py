"""UI components for Mexico."""

from src.ui.components.dice_tray import render_dice_tray
from src.ui.components.event_log import format_event, render_event_log
from src.ui.components.popups import render_popups
from src.ui.components.scoreboard import render_pot, render_scoreboard
from src.ui.components.turn_controls import render_turn_controls

__all__ = [
    "format_event",
    "render_dice_tray",
    "render_event_log",
    "render_popups",
    "render_pot",
    "render_scoreboard",
    "render_turn_controls",
]
