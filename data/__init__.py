"""Synthetic data helpers for SpendView."""
