"""Setup page — register players before the initial roll."""

from __future__ import annotations

import streamlit as st

from src.engine.mexico import MexicoGame
from src.realtime.sync_manager import GameSession


def render_setup_page(session: GameSession) -> None:
    """Render the player registration page."""
    st.title("Mexico")
    st.caption("Two dice, one pot, and nowhere to hide")

    players = session.state.players
    roster_full = len(players) >= MexicoGame.MAX_PLAYERS

    with st.form("add_player", clear_on_submit=True):
        name = st.text_input("Player name", max_chars=30, placeholder="Who's drinking?")
        if st.form_submit_button("Add Player", disabled=roster_full):
            if session.dispatch("add_player", name):
                st.rerun()
            else:
                st.warning("Enter a name to add a player.")

    if roster_full:
        st.caption(f"The table is full ({MexicoGame.MAX_PLAYERS} players).")

    st.subheader(f"Players ({len(players)})")
    if not players:
        st.info(f"Add at least {MexicoGame.MIN_PLAYERS} players to start.")

    for player in players:
        name_col, remove_col = st.columns([4, 1])
        with name_col:
            st.markdown(f"**{player.name}**")
        with remove_col:
            if st.button("Remove", key=f"remove_{player.id}", use_container_width=True):
                session.dispatch("remove_player", player.id)
                st.rerun()

    st.divider()
    if st.button(
        "Roll for Turn Order",
        type="primary",
        use_container_width=True,
        disabled=len(players) < MexicoGame.MIN_PLAYERS,
    ):
        session.dispatch("start_initial_roll")
        st.rerun()
