"""Streamlit dashboard for the air traffic questions."""
