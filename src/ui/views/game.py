"""Game page — the main play area with dice, controls, and scoreboard."""

from __future__ import annotations

import streamlit as st

from src.realtime.sync_manager import GameSession
from src.ui.components.dice_tray import render_dice_tray
from src.ui.components.popups import render_popups
from src.ui.components.scoreboard import render_pot, render_scoreboard
from src.ui.components.turn_controls import render_turn_controls
from src.ui.themes.animations import render_death_match_banner


def render_game_page(session: GameSession) -> None:
    """Render the main game page for the round or the death match."""
    state = session.state
    is_death_match = state.is_death_match

    # Death match intents are scoped to the death match roster
    roll_intent = "roll_death_match_dice" if is_death_match else "roll_dice"
    next_intent = "next_death_match_player" if is_death_match else "next_player"

    if is_death_match:
        render_death_match_banner([p.name for p in state.death_match_players])
    else:
        st.title(f"Round {state.round_number}")

    blocked = render_popups(session)

    # --- Layout: game area (3) | scoreboard (1) ---
    game_col, score_col = st.columns([3, 1])

    with score_col:
        render_pot(state.pot, state.mexico_mode)
        render_scoreboard(
            players=state.active_players,
            current_index=state.current_player_index,
            max_throws=state.max_throws,
            title="Death Match" if is_death_match else "Scoreboard",
        )

    player = state.current_player
    if player is None:
        with game_col:
            st.info("Waiting for the next player...")
        return

    with game_col:
        st.subheader(f"{player.name}'s turn")
        st.caption(f"Throws: {player.throws_used}/{state.max_throws}")

        lock_action = render_dice_tray(
            dice=player.current_dice,
            locked_position=player.locked_position,
            throws_used=player.throws_used,
            can_lock=not blocked and player.score is None,
        )
        if lock_action is not None:
            action, position = lock_action
            if action == "lock":
                face = player.current_dice.face_at(position)
                session.dispatch("lock_die", face, position)
            else:
                session.dispatch("unlock_die")
            st.rerun()

        action = render_turn_controls(player, state.max_throws, disabled=blocked)
        if action == "roll":
            session.dispatch(roll_intent)
            st.rerun()
        elif action == "confirm":
            session.dispatch("confirm_score")
            st.rerun()
        elif action == "next":
            session.dispatch(next_intent)
            st.rerun()
