"""Mexico — Streamlit Application Entrypoint."""

from __future__ import annotations

from collections import deque

import streamlit as st

from src.config.settings import configure_logging, get_settings
from src.engine.base import NavigationTarget
from src.realtime.sync_manager import GameSession, create_session


_RULES = """\
**Goal:** Don't throw the lowest score of the round!

**Throwing:**
- Throw two dice, up to 3 times per turn
- The first player sets the throw limit for everyone else
- Lock a **1** or a **2** and only throw the other die

**Scoring:**
| Throw | Result |
|---|---|
| 1-2 | **Mexico!** 5 drinks in the pot, all hundreds burned |
| Double | Hundreds (4-4 = 400), face value in drinks to the pot |
| 2-3 | **Sand!** Lowest possible, half a glass |
| 1-3 | **Pointing** — doesn't count, throw again |
| Other | High die first (6-4 = 64) |

**Duim:** the same throw twice in a row.

**Death match:** players tied for the lowest score play again
until one loser is left.
"""

_PAGES: dict[NavigationTarget, str] = {
    NavigationTarget.INITIAL_ROLL: "initial_roll",
    NavigationTarget.GAME: "game",
    NavigationTarget.RESULT: "results",
}


def _get_session() -> GameSession:
    """Create the game session once per browser session."""
    ss = st.session_state
    if "session" not in ss:
        from src.ui.components.event_log import MAX_EVENT_LOG_ENTRIES, format_event

        session = create_session()
        event_log: deque[str] = deque(maxlen=MAX_EVENT_LOG_ENTRIES)
        session.subscribe(lambda payload: event_log.append(format_event(payload)))
        ss["session"] = session
        ss["event_log"] = event_log
        ss["page"] = "setup"
    return ss["session"]


def main() -> None:
    """Application entrypoint. Must call ``st.set_page_config`` first."""
    st.set_page_config(
        page_title="Mexico",
        page_icon="🎲",
        layout="wide",
        initial_sidebar_state="collapsed",
    )

    settings = get_settings()
    configure_logging(settings)

    from src.ui.themes import load_css
    load_css()

    session = _get_session()
    target = session.consume_navigation()
    if target is not None:
        st.session_state["page"] = _PAGES[target]

    # Page routing (lazy imports to avoid circular deps)
    page = st.session_state["page"]

    if page == "setup":
        from src.ui.views.setup import render_setup_page
        render_setup_page(session)
    elif page == "initial_roll":
        from src.ui.views.initial_roll import render_initial_roll_page
        render_initial_roll_page(session)
    elif page == "game":
        from src.ui.views.game import render_game_page
        render_game_page(session)
    elif page == "results":
        from src.ui.views.results import render_results_page
        render_results_page(session)
    else:
        st.session_state["page"] = "setup"
        st.rerun()

    with st.sidebar:
        st.markdown("### Mexico Rules")
        st.markdown(_RULES)
        if settings.show_event_log:
            from src.ui.components.event_log import render_event_log
            st.divider()
            render_event_log(st.session_state["event_log"])


if __name__ == "__main__":
    main()
