"""Special-roll popups — Mexico, Sand, Pointing and Duim banners."""

from __future__ import annotations

import streamlit as st

from src.realtime.sync_manager import GameSession
from src.ui.themes.animations import render_special_roll_banner

# (notification flag, dismiss intent, title, message, css class)
_POPUPS = (
    ("mexico", "dismiss_mexico_popup", "MEXICO!", "5 drinks into the pot. All hundreds are burned!", "mexico"),
    ("sand", "dismiss_sand_popup", "SAND!", "Half a glass, straight away.", "sand"),
    ("pointing", "dismiss_pointing_popup", "POINTING!", "Point at the others. This throw doesn't count.", "pointing"),
    ("duim", "dismiss_duim_popup", "DUIM!", "Exactly the same throw as last time.", "duim"),
)


def render_popups(session: GameSession) -> bool:
    """Render every open popup with its dismiss button.

    Returns:
        True while a popup that blocks play is open.
    """
    notifications = session.notifications
    for flag, intent, title, message, css_class in _POPUPS:
        if not getattr(notifications, flag):
            continue
        render_special_roll_banner(title, message, css_class)
        if st.button("OK", key=f"dismiss_{flag}", type="primary", use_container_width=True):
            session.dispatch(intent)
            st.rerun()
    return notifications.blocks_play
