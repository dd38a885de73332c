"""Scoreboard component — pot, player scores and turn indicator."""

from __future__ import annotations

import streamlit as st

from src.engine.models import Player


def render_pot(pot: int, mexico_mode: bool) -> None:
    """Render the shared pot of drinks."""
    badge = '<span class="mexico-badge">MEXICO</span>' if mexico_mode else ""
    st.markdown(
        f'<div class="pot">Pot: <strong>{pot}</strong> drinks{badge}</div>',
        unsafe_allow_html=True,
    )


def render_scoreboard(
    players: tuple[Player, ...],
    current_index: int,
    max_throws: int | None,
    title: str = "Scoreboard",
) -> None:
    """Render the scoreboard panel.

    Args:
        players: Roster being played, in turn order.
        current_index: Index into ``players`` for whose turn it is.
        max_throws: Throw cap for the round.
        title: Panel heading.
    """
    html = ['<div class="scoreboard">']
    html.append(f'<div class="scoreboard-title">{title}</div>')

    for idx, player in enumerate(players):
        is_active = idx == current_index
        row_classes = ["player-row"]
        if is_active:
            row_classes.append("active")

        indicator = "&#127922; " if is_active else ""
        score = player.score.display_text if player.score else "&mdash;"
        throws = ""
        if is_active and max_throws is not None:
            throws = f'<span class="throws">{player.throws_used}/{max_throws}</span>'

        html.append(
            f'<div class="{" ".join(row_classes)}">'
            f'<span class="name">{indicator}{player.name}{throws}</span>'
            f'<span class="score">{score}</span>'
            f"</div>"
        )

    html.append("</div>")
    st.markdown("".join(html), unsafe_allow_html=True)
