"""Configuration module for the KTS Text Analyzer.

Loads configuration from environment variables with smart defaults.
Supports variable interpolation in .env files.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load environment variables with interpolation support
# This allows using ${VAR} syntax in .env files
load_dotenv(override=False, interpolate=True)


def _expanduser(path_str: str) -> Path:
    """Expand ~ and environment variables in path string."""
    return Path(os.path.expandvars(path_str)).expanduser()


def _optional_path(name: str) -> Optional[Path]:
    """Read an optional path setting; empty values mean 'not set'."""
    value = os.getenv(name, '').strip()
    return _expanduser(value) if value else None


# =============================================================================
# Package Directories
# =============================================================================

PACKAGE_DIR = Path(__file__).parent
PROMPTS_DIR = PACKAGE_DIR / 'prompts'

# =============================================================================
# Classification Boundary
# =============================================================================

# Local proxy endpoint that forwards requests to the model service.
# Takes precedence over the direct API keys when set.
KTS_PROXY_URL = os.getenv('KTS_PROXY_URL')

ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY')
GOOGLE_API_KEY = os.getenv('GOOGLE_API_KEY')

KTS_MODEL = os.getenv('KTS_MODEL', 'claude-sonnet-4-20250514')
KTS_GEMINI_MODEL = os.getenv('KTS_GEMINI_MODEL', 'gemini-2.0-flash')
KTS_MAX_TOKENS = int(os.getenv('KTS_MAX_TOKENS', '1000'))
KTS_REQUEST_TIMEOUT = int(os.getenv('KTS_REQUEST_TIMEOUT', '120'))

# =============================================================================
# Input Handling
# =============================================================================

# Plain text is silently cut to this many characters before sending
TEXT_CHAR_LIMIT = int(os.getenv('KTS_TEXT_CHAR_LIMIT', '12000'))

# =============================================================================
# Rendering
# =============================================================================

# Backdrop image for the quadrant plot; a drawn backdrop is used when unset
PLOT_BACKGROUND_PATH = _optional_path('KTS_PLOT_BACKGROUND')
PLOT_PIXEL_RATIO = int(os.getenv('KTS_PLOT_PIXEL_RATIO', '2'))

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('KTS_LOG_LEVEL', 'INFO').upper()


# =============================================================================
# Validation
# =============================================================================

def validate_config():
    """Validate configuration and warn about potential issues."""
    issues = []

    if not (KTS_PROXY_URL or ANTHROPIC_API_KEY or GOOGLE_API_KEY):
        issues.append(
            "No classification boundary configured.\n"
            "  Set KTS_PROXY_URL, ANTHROPIC_API_KEY or GOOGLE_API_KEY."
        )

    if PLOT_BACKGROUND_PATH is not None and not PLOT_BACKGROUND_PATH.exists():
        issues.append(
            f"Plot background image not found: {PLOT_BACKGROUND_PATH}\n"
            f"  The built-in quadrant backdrop will be drawn instead."
        )

    if TEXT_CHAR_LIMIT <= 0:
        issues.append(f"KTS_TEXT_CHAR_LIMIT must be positive (got {TEXT_CHAR_LIMIT})")

    if PLOT_PIXEL_RATIO < 1:
        issues.append(f"KTS_PLOT_PIXEL_RATIO must be at least 1 (got {PLOT_PIXEL_RATIO})")

    return issues


# =============================================================================
# Helper Functions
# =============================================================================

def get_config_summary() -> str:
    """Get a human-readable summary of current configuration."""
    return f"""
KTS Text Analyzer Configuration
===============================

Classification Boundary:
  Proxy URL:           {KTS_PROXY_URL or '✗ Not set'}
  Anthropic Key:       {'✓ Set' if ANTHROPIC_API_KEY else '✗ Not set'}
  Google Key:          {'✓ Set' if GOOGLE_API_KEY else '✗ Not set'}
  Model:               {KTS_MODEL}
  Gemini Model:        {KTS_GEMINI_MODEL}
  Max Tokens:          {KTS_MAX_TOKENS}
  Request Timeout:     {KTS_REQUEST_TIMEOUT}s

Input:
  Text Limit:          {TEXT_CHAR_LIMIT:,} chars

Rendering:
  Plot Background:     {PLOT_BACKGROUND_PATH or '(built-in)'}
  Pixel Ratio:         {PLOT_PIXEL_RATIO}

Logging:
  Level:               {LOG_LEVEL}
"""


if __name__ == '__main__':
    # When run as a script, display configuration
    print(get_config_summary())

    # Validate and show any issues
    issues = validate_config()
    if issues:
        print("\nConfiguration Issues:")
        print("=" * 50)
        for issue in issues:
            print(f"⚠️  {issue}\n")
    else:
        print("\n✅ Configuration looks good!")
