"""About page for the KTS Text Analyzer."""

import streamlit as st

st.title("ℹ️ About")

st.markdown("""
**KTS Text Analyzer** maps written text onto the Kinetic Thinking Styles (KTS)
framework by analysing linguistic markers of two attitudes.

## The Framework

### Attitude towards uncertainty (what we do)
- **Reason**: rational justification, evidence, planning, accountability
- **Play**: probing, experimenting, improvising, tolerating ambiguity

### Attitude towards possibility (what we see)
- **Structure**: established categories, fit assessment, what *is*
- **Openness**: reframing, imagining alternatives, what is *not yet*

### Styles
- **Focused** (reason + structure)
- **Incremental** (reason + openness)
- **Playful** (play + structure)
- **Breakaway** (play + openness)

## How It Works

1. **Input**: paste text, pick a sample, or upload a PDF, DOCX, TXT or MD file
2. **Extraction**: text files and DOCX are read locally; PDFs are sent to the model as documents
3. **Classification**: a hosted language model scores both dimensions from -10 to +10
4. **Results**: the scores are plotted on the quadrant chart with the model's reasoning

Nothing is stored: results live only in your browser session and can be
downloaded as Markdown.

## Caveats

This is a prototype. Scores come from a language model following a fixed
prompt and are not a validated psychometric instrument.
""")
