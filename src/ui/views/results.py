"""Results page — loser, pot and standings for the round."""

from __future__ import annotations

import streamlit as st

from src.engine.scoring import MexicoScoring
from src.realtime.sync_manager import GameSession
from src.ui.themes.animations import render_loser_animation


def render_results_page(session: GameSession) -> None:
    """Render the round result page."""
    state = session.state
    loser = state.loser

    st.title(f"Round {state.round_number} Result")

    if loser is not None:
        penalty = MexicoScoring.loser_penalty(state.pot, state.has_sand_loser)
        render_loser_animation(loser.name, penalty)
    else:
        st.info("Nobody stood on a score this round. Nobody drinks!")

    st.metric("Pot", f"{state.pot} drinks")

    st.subheader("Standings")
    for rank, player in enumerate(state.standings, 1):
        score = player.score.display_text if player.score else "—"
        style = "font-weight:700;" if loser and player.id == loser.id else ""
        st.markdown(
            f'<div class="player-row" style="{style}">'
            f'<span class="name">{rank}. {player.name}</span>'
            f'<span class="score">{score}</span>'
            f"</div>",
            unsafe_allow_html=True,
        )

    st.divider()
    if st.button("Next Round", type="primary", use_container_width=True):
        session.dispatch("start_new_round")
        st.rerun()
