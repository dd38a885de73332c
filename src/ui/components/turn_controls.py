"""Turn control buttons — Throw, Stand, Next player."""

from __future__ import annotations

import streamlit as st

from src.engine.models import Player


def render_turn_controls(
    player: Player,
    max_throws: int | None,
    disabled: bool = False,
) -> str | None:
    """Render contextual turn-action buttons.

    Returns:
        ``"roll"``, ``"confirm"``, ``"next"``, or ``None`` if no action taken.
    """
    throws_left = max_throws is not None and player.throws_used < max_throws
    can_confirm = player.has_rolled and player.current_dice is not None and player.score is None

    cols = st.columns(2)

    with cols[0]:
        if throws_left:
            label = "Throw Dice" if player.throws_used == 0 else "Throw Again"
            if st.button(
                label,
                key=f"btn_roll_{player.id}_{player.throws_used}",
                use_container_width=True,
                disabled=disabled,
                type="primary",
            ):
                return "roll"
        elif not can_confirm:
            if st.button(
                "Next Player",
                key=f"btn_next_{player.id}",
                use_container_width=True,
                disabled=disabled,
            ):
                return "next"
        else:
            st.caption("No throws left — stand on this score.")

    with cols[1]:
        if st.button(
            "Stand",
            key=f"btn_confirm_{player.id}_{player.throws_used}",
            use_container_width=True,
            disabled=disabled or not can_confirm,
            type="secondary" if throws_left else "primary",
        ):
            return "confirm"

    return None
