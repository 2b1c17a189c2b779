"""Profile page: account details and password change."""

from __future__ import annotations

from typing import Any

import streamlit as st

from app.layout import card
from app.session import AppSession, run
from core import FetchError, MutationError

PROFILE_KEY = "profile_data"
MIN_PASSWORD_LENGTH = 8


def validate_password_change(current: str, new: str, confirm: str) -> str | None:
    """Return a user-facing problem with the password form, or ``None`` when it is valid."""

    if not current or not new:
        return "Please fill in all password fields."
    if new != confirm:
        return "New passwords do not match."
    if len(new) < MIN_PASSWORD_LENGTH:
        return f"New password must be at least {MIN_PASSWORD_LENGTH} characters."
    return None


def _load_profile(session: AppSession) -> dict[str, Any] | None:
    if PROFILE_KEY in st.session_state:
        return st.session_state[PROFILE_KEY]
    try:
        profile = run(session.client.get_profile())
    except FetchError as exc:
        st.error(str(exc))
        return None
    st.session_state[PROFILE_KEY] = profile
    return profile


def _render_profile_card(session: AppSession, profile: dict[str, Any]) -> None:
    with st.form("profile-form"):
        username = st.text_input("Username", value=str(profile.get("username", "")), disabled=True)
        email = st.text_input("Email", value=str(profile.get("email", "")))
        full_name = st.text_input("Full name", value=str(profile.get("full_name") or ""))
        submitted = st.form_submit_button("Update profile", type="primary")

    if not submitted:
        return
    try:
        updated = run(session.client.update_profile({"username": username, "email": email, "full_name": full_name}))
    except MutationError as exc:
        st.error(str(exc))
        return
    st.session_state[PROFILE_KEY] = updated
    st.success("Profile updated successfully.")


def _render_password_card(session: AppSession) -> None:
    with st.form("password-form", clear_on_submit=True):
        current = st.text_input("Current password", type="password")
        new = st.text_input("New password", type="password")
        confirm = st.text_input("Confirm new password", type="password")
        submitted = st.form_submit_button("Change password")

    if not submitted:
        return
    problem = validate_password_change(current, new, confirm)
    if problem:
        st.error(problem)
        return
    try:
        run(session.client.change_password(current, new))
    except MutationError as exc:
        st.error(str(exc))
        return
    st.success("Password updated successfully.")


def render_page(session: AppSession) -> None:
    """Render the profile page."""

    st.title("Profile")
    profile = _load_profile(session)

    left, right = st.columns(2, gap="medium")
    with left:
        with card("Account"):
            if profile is None:
                st.info("Profile details are unavailable right now.")
            else:
                _render_profile_card(session, profile)
    with right:
        with card("Password"):
            _render_password_card(session)


__all__ = ["MIN_PASSWORD_LENGTH", "render_page", "validate_password_change"]
