"""Shared layout primitives for the SpendView Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Sequence

import streamlit as st
from streamlit.components.v1 import html as components_html

from core import CATEGORIES, FilterCriteria


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str
    enabled: bool = True


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("expenses", "Expenses", True),
    NavigationLink("dashboard", "Dashboard", True),
    NavigationLink("profile", "Profile", True),
)

DEFAULT_PAGE = "expenses"


def inject_css() -> None:
    """Inject global CSS tokens and component styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          body, [data-testid="stAppViewContainer"] > .main {
            background: #F4F6FB;
          }

          .block-container {
            max-width: 1200px;
            padding-top: 2.5rem;
            padding-bottom: 4rem;
          }

          .sv-nav {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 2rem;
            padding: 0.9rem 0;
          }

          .sv-nav__brand {
            font-size: 1.5rem;
            font-weight: 700;
            color: #0B3FD6;
          }

          .sv-nav__links {
            display: flex;
            align-items: center;
            gap: 1.8rem;
          }

          .sv-nav__link,
          .sv-nav__link:visited {
            position: relative;
            font-weight: 600;
            color: #5C6478;
            text-decoration: none;
          }

          .sv-nav__link:hover,
          .sv-nav__link.is-active {
            color: #1D4ED8;
          }

          .sv-nav__link.is-active::after {
            content: "";
            position: absolute;
            left: 0;
            right: 0;
            bottom: -8px;
            height: 3px;
            border-radius: 999px;
            background: linear-gradient(90deg, #1D4ED8, #0EA5E9);
          }

          .sv-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .sv-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
          }

          .sv-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 12px;
            font-weight: 600;
            color: #111827;
            flex-wrap: wrap;
          }

          .sv-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #D6DEFF;
            background: #F0F4FF;
            color: #3346FF;
            white-space: nowrap;
          }

          .sv-muted {
            color: #6B7280;
          }

          @media (max-width: 768px) {
            .sv-nav {
              flex-direction: column;
              align-items: flex-start;
              gap: 0.75rem;
            }
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable SpendView card."""

    chip_html = f'<span class="sv-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="sv-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="sv-card__head"><span>{title}</span>{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def render_navbar(active_page: str) -> None:
    """Render the top navigation bar with active state."""

    link_markup: list[str] = []
    for link in NAV_LINKS:
        if not link.enabled:
            continue
        css_class = "sv-nav__link"
        aria_current = ""
        if link.slug == active_page:
            css_class += " is-active"
            aria_current = ' aria-current="page"'
        link_markup.append(
            f'<a class="{css_class}" href="?page={link.slug}"{aria_current} target="_self">{link.label}</a>'
        )

    st.markdown(
        f"""
        <nav class="sv-nav">
            <div class="sv-nav__brand">SpendView</div>
            <div class="sv-nav__links">{''.join(link_markup)}</div>
        </nav>
        """,
        unsafe_allow_html=True,
    )
    _enforce_same_tab_navigation()


def category_options(seen: Iterable[str]) -> list[str]:
    """Known categories followed by any extra ones present in the data."""

    options = list(CATEGORIES)
    options.extend(category for category in seen if category not in options)
    return options


def render_filter_sidebar(criteria: FilterCriteria, categories: Sequence[str]) -> FilterCriteria | None:
    """Render the filter controls and return new criteria when the user changed them.

    ``None`` means the selection is unchanged, so the caller keeps its page.
    """

    all_label = "All categories"
    options = [all_label, *categories]
    current = criteria.category if criteria.category in categories else all_label

    with st.sidebar:
        st.markdown("### Filters")
        with st.form("expense-filters"):
            category = st.selectbox("Category", options, index=options.index(current))
            start_date = st.date_input("From", value=criteria.start_date, format="YYYY-MM-DD")
            end_date = st.date_input("To", value=criteria.end_date, format="YYYY-MM-DD")
            apply_clicked = st.form_submit_button("Apply filters", use_container_width=True)
        reset_clicked = st.button("Reset filters", use_container_width=True, disabled=not criteria.is_active)

    if reset_clicked:
        return criteria.cleared()
    if not apply_clicked:
        return None

    proposed = FilterCriteria(
        category=None if category == all_label else category,
        start_date=start_date or None,
        end_date=end_date or None,
    )
    return None if proposed == criteria else proposed


def _enforce_same_tab_navigation() -> None:
    """Ensure navigation links stay within the same browser tab."""

    components_html(
        """
        <script>
        (function() {
          if (window.parent && !window.parent.__svNavSameTab) {
            window.parent.__svNavSameTab = true;
            const enforce = () => {
              const anchors = window.parent.document.querySelectorAll('a.sv-nav__link');
              anchors.forEach((anchor) => {
                if (anchor.target && anchor.target.toLowerCase() !== '_self') {
                  anchor.target = '_self';
                }
              });
            };
            enforce();
            const observer = new MutationObserver(enforce);
            observer.observe(window.parent.document.body, { childList: true, subtree: true });
          }
        })();
        </script>
        """,
        height=0,
        width=0,
    )


def determine_active_page(valid_pages: Iterable[str]) -> str:
    """Determine the active page from the query params or session state."""

    params = st.query_params
    default_page = st.session_state.get("active_page", DEFAULT_PAGE)
    raw_page = params.get("page", default_page)
    if isinstance(raw_page, list):
        raw_page = raw_page[0]

    page = raw_page if raw_page in set(valid_pages) else DEFAULT_PAGE

    if st.session_state.get("active_page") != page:
        st.session_state["active_page"] = page

    if params.get("page") != page:
        st.query_params["page"] = page

    return page


__all__ = [
    "DEFAULT_PAGE",
    "NAV_LINKS",
    "NavigationLink",
    "card",
    "category_options",
    "determine_active_page",
    "inject_css",
    "render_filter_sidebar",
    "render_navbar",
]
