"""SpendView expense tracker with responsive card layout."""

from __future__ import annotations

import streamlit as st

from app.layout import NAV_LINKS, determine_active_page, inject_css, render_navbar
from app.pages import render_dashboard_page, render_expenses_page, render_profile_page
from app.session import get_session
from config import get_logger, get_settings, setup_logging

logger = get_logger(__name__)

PAGE_RENDERERS = {
    "expenses": render_expenses_page,
    "dashboard": render_dashboard_page,
    "profile": render_profile_page,
}


def main() -> None:
    """Application entrypoint for the SpendView app."""

    st.set_page_config(
        page_title="SpendView",
        page_icon="💸",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    setup_logging(get_settings())

    inject_css()
    valid_pages = [link.slug for link in NAV_LINKS if link.enabled]
    active_page = determine_active_page(valid_pages)
    render_navbar(active_page)

    session = get_session()
    if active_page != "profile":
        with st.spinner("Loading expenses…"):
            session.ensure_loaded()

    logger.debug("Rendering %s page", active_page)
    PAGE_RENDERERS[active_page](session)


if __name__ == "__main__":
    main()
