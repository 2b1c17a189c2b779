"""Streamlit front end for SpendView."""

from .main import main

__all__ = ["main"]
