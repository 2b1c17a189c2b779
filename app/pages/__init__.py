"""Page modules for the SpendView Streamlit application."""

from .dashboard import render_page as render_dashboard_page
from .expenses import render_page as render_expenses_page
from .profile import render_page as render_profile_page

__all__ = [
    "render_dashboard_page",
    "render_expenses_page",
    "render_profile_page",
]
