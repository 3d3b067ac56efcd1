"""Streamlit front end for the KTS Text Analyzer."""
