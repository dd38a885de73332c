"""CSS injection and HTML animation helpers for the cantina theme."""

from pathlib import Path

import streamlit as st


def load_css() -> None:
    """Inject the cantina CSS theme into the Streamlit app."""
    css_path = Path(__file__).parent / "cantina.css"
    css_text = css_path.read_text(encoding="utf-8")
    st.markdown(f"<style>{css_text}</style>", unsafe_allow_html=True)


def render_special_roll_banner(title: str, message: str, css_class: str) -> None:
    """Render a special-roll banner with pulse animation."""
    st.markdown(
        f'<div class="special-roll {css_class}">'
        f"<h2>{title}</h2>"
        f"<p>{message}</p>"
        "</div>",
        unsafe_allow_html=True,
    )


def render_death_match_banner(names: list[str]) -> None:
    """Render the death match banner listing the tied players."""
    st.markdown(
        '<div class="death-match-banner">'
        "&#9760; DEATH MATCH &#9760;"
        f'<div class="entrants">{" vs ".join(names)}</div>'
        "</div>",
        unsafe_allow_html=True,
    )


def render_loser_animation(name: str, penalty: str) -> None:
    """Render the loser overlay with shake animation."""
    st.markdown(
        '<div class="loser-overlay">'
        f"<h1>{name} loses!</h1>"
        f"<p>{penalty}</p>"
        "</div>",
        unsafe_allow_html=True,
    )
