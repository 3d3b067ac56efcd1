#!/usr/bin/env python3
"""
Classify text against the Kinetic Thinking Styles framework.

Usage:
    kts-analyze notes.docx
    kts-analyze report.pdf --plot report.png --markdown report.md
    kts-analyze --text "We tried three wild prototypes and kept the one that surprised us."
    kts-analyze --sample "Operations report"
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from kts_analyzer import config
from kts_analyzer.streamlit_app.components import render_score_plot
from kts_analyzer.streamlit_app.models import ExtractionFailure, InputSource, PlainText
from kts_analyzer.streamlit_app.services import (
    AnalysisService,
    DocumentExtractor,
    create_provider,
    format_result_markdown,
)
from kts_analyzer.streamlit_app.services.errors import KTSAnalyzerError
from kts_analyzer.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Map text onto the Kinetic Thinking Styles framework'
    )
    parser.add_argument(
        'file',
        nargs='?',
        type=Path,
        help='Document to analyse (PDF, DOCX, TXT, MD or CSV)'
    )
    parser.add_argument(
        '--text',
        type=str,
        help='Analyse this text instead of a file'
    )
    parser.add_argument(
        '--sample',
        type=str,
        help='Analyse one of the built-in sample texts by name'
    )
    parser.add_argument(
        '--model',
        type=str,
        default=None,
        help='Model identifier (defaults to the provider default)'
    )
    parser.add_argument(
        '--plot',
        type=Path,
        help='Write the quadrant plot to this PNG file'
    )
    parser.add_argument(
        '--markdown',
        type=Path,
        help='Write a Markdown report to this file'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    return parser.parse_args(argv)


def resolve_source(args: argparse.Namespace, service: AnalysisService) -> tuple[InputSource, Optional[str]]:
    """
    Turn the command line into an input source and a label for reports.

    Raises:
        ValueError: If the arguments do not name exactly one input, or it cannot be read
    """
    chosen = [value for value in (args.file, args.text, args.sample) if value]
    if len(chosen) != 1:
        raise ValueError("Provide exactly one of FILE, --text or --sample")

    if args.text:
        return PlainText(text=args.text), None

    if args.sample:
        samples = service.get_sample_texts()
        if args.sample not in samples:
            raise ValueError(f"Unknown sample '{args.sample}'. Available: {', '.join(samples)}")
        return PlainText(text=samples[args.sample]), args.sample

    extraction = DocumentExtractor().extract(args.file.name, args.file.read_bytes())
    if isinstance(extraction, ExtractionFailure):
        raise ValueError(extraction.reason)
    return extraction.to_source(), args.file.name


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging("DEBUG" if args.verbose else None)

    try:
        service = AnalysisService(provider=create_provider(default_model=args.model))
        source, label = resolve_source(args, service)
    except (ValueError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    try:
        result = service.analyze(source)
    except KTSAnalyzerError as e:
        print(f"❌ {e.user_message}", file=sys.stderr)
        return 1

    print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))

    if args.plot:
        image = render_score_plot(
            result.uncertainty_score,
            result.possibility_score,
            result.style,
            pixel_ratio=config.PLOT_PIXEL_RATIO,
            background_path=config.PLOT_BACKGROUND_PATH,
        )
        image.save(args.plot, format="PNG")
        logger.info("Saved plot to %s", args.plot)

    if args.markdown:
        report = format_result_markdown(
            result,
            source_label=label,
            model_name=service.model_name,
            provider_name=service.provider.display_name,
        )
        args.markdown.write_text(report, encoding="utf-8")
        logger.info("Saved report to %s", args.markdown)

    return 0


if __name__ == '__main__':
    sys.exit(main())
