"""Console entry points: ``kts-analyzer`` (dashboard) and ``kts-analyze`` (one-shot classification)."""
import subprocess
import sys
from pathlib import Path


def dashboard_command(extra_args: list[str]) -> list[str]:
    """Streamlit command line for the analyzer app; extra arguments go to ``streamlit run``."""
    from kts_analyzer import streamlit_app

    app_path = Path(streamlit_app.__file__).parent / "app.py"
    return ["streamlit", "run", str(app_path), *extra_args]


def dashboard():
    """Serve the text analyzer in the browser."""
    result = subprocess.run(dashboard_command(sys.argv[1:]), check=False)
    return result.returncode


def analyze():
    """Classify a document, inline text or sample from the terminal."""
    from kts_analyzer.scripts.analyze_text import main
    return main() or 0
