"""Streamlit dashboard for LaunchLens."""
