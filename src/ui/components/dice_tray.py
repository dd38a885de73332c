"""Dice tray component — renders both dice with lock/unlock controls."""

from __future__ import annotations

import streamlit as st

from src.engine.base import DicePair, DiePosition
from src.engine.scoring import MexicoScoring


def render_dice_tray(
    dice: DicePair | None,
    locked_position: DiePosition | None,
    throws_used: int,
    can_lock: bool,
) -> tuple[str, DiePosition | None] | None:
    """Render the current throw with interactive lock buttons.

    Args:
        dice: Current throw, or None before the first throw.
        locked_position: Slot of the locked die, if any.
        throws_used: Throws taken this turn (used in button keys).
        can_lock: Whether lock buttons should be offered at all.

    Returns:
        ``("lock", position)``, ``("unlock", None)``, or ``None`` if no action taken.
    """
    if dice is None:
        st.markdown(
            '<div class="dice-tray">'
            '<span class="dice-hint">Throw the dice to begin your turn.</span>'
            "</div>",
            unsafe_allow_html=True,
        )
        return None

    html_parts = ['<div class="dice-tray">']
    for position in DiePosition:
        classes = ["die"]
        if position == locked_position:
            classes.append("locked")
        html_parts.append(f'<div class="{" ".join(classes)}">{dice.face_at(position)}</div>')
    html_parts.append("</div>")
    st.markdown("".join(html_parts), unsafe_allow_html=True)

    cols = st.columns(2)
    for position, col in zip(DiePosition, cols):
        face = dice.face_at(position)
        with col:
            if position == locked_position:
                key = f"unlock_{position.value}_t{throws_used}"
                if st.button("Locked", key=key, use_container_width=True, type="primary"):
                    return ("unlock", None)
            elif can_lock and locked_position is None and MexicoScoring.can_lock_die(face):
                key = f"lock_{position.value}_t{throws_used}"
                if st.button(f"Lock {face}", key=key, use_container_width=True):
                    return ("lock", position)
            else:
                # Keep the two columns aligned
                key = f"nolock_{position.value}_t{throws_used}"
                st.button("---", key=key, use_container_width=True, disabled=True)

    return None
