"""Initial roll page — one die each decides who starts."""

from __future__ import annotations

import streamlit as st

from src.realtime.sync_manager import GameSession


def render_initial_roll_page(session: GameSession) -> None:
    """Render the turn-order roll page."""
    state = session.state
    player = state.current_player

    st.title("Who Starts?")
    st.caption("Everyone throws one die. Highest throw goes first.")

    if player is None:
        st.error("No players registered.")
        return

    st.subheader(f"{player.name}'s throw")

    if player.initial_roll is None:
        st.markdown(
            '<div class="dice-tray"><span class="dice-hint">Throw one die.</span></div>',
            unsafe_allow_html=True,
        )
        if st.button("Throw", type="primary", use_container_width=True, key=f"init_{player.id}"):
            session.dispatch("perform_initial_roll")
            st.rerun()
    else:
        st.markdown(
            f'<div class="dice-tray"><div class="die">{player.initial_roll}</div></div>',
            unsafe_allow_html=True,
        )
        is_last = state.current_player_index == len(state.players) - 1
        label = "Start the Game" if is_last else "Next Player"
        if st.button(label, type="primary", use_container_width=True, key=f"next_{player.id}"):
            session.dispatch("next_initial_roll")
            st.rerun()

    st.divider()
    for p in state.players:
        roll = p.initial_roll if p.initial_roll is not None else "—"
        st.markdown(f"{p.name}: **{roll}**")
