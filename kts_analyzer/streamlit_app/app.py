"""
KTS Text Analyzer

A Streamlit application that maps written text onto the Kinetic Thinking
Styles framework (Dimov & Pistrui).
"""

import streamlit as st
from dotenv import load_dotenv

from kts_analyzer.utils.logging import setup_logging

# Load environment variables from .env file
load_dotenv()
setup_logging()

# Configure page
st.set_page_config(
    page_title="KTS Text Analyzer",
    page_icon="🧭",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# Custom CSS for the dimension bars and result panels
st.markdown("""
    <style>
    .stApp {
        font-family: Georgia, 'Times New Roman', serif;
    }

    .kts-bar {
        margin-bottom: 16px;
    }

    .kts-bar-labels {
        display: flex;
        justify-content: space-between;
        margin-bottom: 4px;
    }

    .kts-bar-pole {
        font-size: 11px;
        color: #8899bb;
        font-style: italic;
    }

    .kts-bar-title {
        font-size: 12px;
        color: #c0ccdd;
        font-weight: 600;
    }

    .kts-bar-track {
        height: 6px;
        background: rgba(100, 140, 200, 0.1);
        border-radius: 3px;
        position: relative;
    }

    .kts-bar-centre {
        position: absolute;
        left: 50%;
        top: 0;
        width: 1px;
        height: 6px;
        background: rgba(160, 180, 220, 0.3);
    }

    .kts-bar-marker {
        position: absolute;
        top: -3px;
        width: 12px;
        height: 12px;
        border-radius: 50%;
        transform: translateX(-50%);
    }

    .kts-bar-score {
        text-align: center;
        margin-top: 4px;
        font-size: 13px;
        font-weight: 600;
    }

    .kts-indicator {
        display: inline-block;
        padding: 4px 12px;
        margin: 0 8px 8px 0;
        font-size: 12px;
        font-style: italic;
        background: rgba(100, 140, 200, 0.08);
        border: 1px solid rgba(100, 140, 200, 0.12);
        border-radius: 3px;
        color: #8899bb;
    }
    </style>
    """, unsafe_allow_html=True)

# Define pages
analyzer_page = st.Page(
    "pages/analyzer.py",
    title="Analyze Text",
    icon="🧭",
    default=True,
)

about_page = st.Page(
    "pages/about.py",
    title="About",
    icon="ℹ️",
)

# Build navigation
pg = st.navigation(
    {
        "Analysis": [analyzer_page],
        "Info": [about_page],
    }
)

# Run the selected page
pg.run()
