"""Analysis service layer for running LLM-powered KTS classification."""

import json
import logging
import re
from pathlib import Path
from typing import Dict, Optional

import requests
import yaml
from jinja2 import Environment, FileSystemLoader, TemplateNotFound
from pydantic import ValidationError

from kts_analyzer import config
from kts_analyzer.streamlit_app.models import (
    AnalysisFailed,
    AnalysisRequest,
    AnalysisResult,
    AnalysisStarted,
    AnalysisSucceeded,
    BinaryDocument,
    InputSource,
    KTSStyle,
    PromptMetadata,
    SampleText,
    UIState,
    is_empty_source,
    reduce,
)
from kts_analyzer.streamlit_app.models.analysis_models import SCORE_MAX, SCORE_MIN
from kts_analyzer.streamlit_app.services.errors import (
    EmptyInputError,
    KTSAnalyzerError,
    NetworkError,
    RemoteError,
    ResponseParseError,
)
from kts_analyzer.streamlit_app.services.llm_providers import ClassificationProvider, create_provider

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?")


def truncate_text(text: str, limit: int = config.TEXT_CHAR_LIMIT) -> str:
    """Keep the first ``limit`` characters; longer input is cut without complaint."""
    return text[:limit]


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers and surrounding whitespace."""
    return _CODE_FENCE.sub("", text).strip()


def collect_text_blocks(data: dict) -> str:
    """Join the text blocks of a response's content list with newlines."""
    content = data.get("content")
    if not isinstance(content, list):
        return ""
    texts = [
        block.get("text")
        for block in content
        if isinstance(block, dict) and block.get("type") == "text"
    ]
    # Blocks whose text is not a string are malformed and skipped
    return "\n".join(text for text in texts if isinstance(text, str) and text)


class AnalysisService:
    """Service for classifying text against the KTS framework."""

    def __init__(
        self,
        provider: Optional[ClassificationProvider] = None,
        prompts_dir: Optional[Path] = None,
        max_tokens: int = config.KTS_MAX_TOKENS,
        text_limit: int = config.TEXT_CHAR_LIMIT,
    ):
        """
        Initialize analysis service.

        Args:
            provider: Classification provider. If None, creates provider from environment.
            prompts_dir: Directory holding the prompt templates and samples
            max_tokens: Completion token limit sent with each request
            text_limit: Maximum number of characters of plain text sent
        """
        if provider is None:
            self.provider = create_provider()
        else:
            self.provider = provider

        self.prompts_dir = Path(prompts_dir or config.PROMPTS_DIR)
        self.max_tokens = max_tokens
        self.text_limit = text_limit

        self.metadata, self.jinja_env = self._load_prompts()
        self.samples = self._load_samples()

    @property
    def model_name(self) -> str:
        return self.provider.default_model

    def _load_prompts(self) -> tuple[Dict[str, PromptMetadata], Environment]:
        """
        Load prompt metadata and the Jinja2 environment for the templates.

        Returns:
            Tuple of (metadata dict, jinja2 environment)
        """
        metadata_file = self.prompts_dir / "metadata.yaml"
        with open(metadata_file, "r", encoding="utf-8") as f:
            raw_metadata = yaml.safe_load(f)

        metadata = {
            key: PromptMetadata(**value) for key, value in raw_metadata.items()
        }

        env = Environment(loader=FileSystemLoader(str(self.prompts_dir)))

        return metadata, env

    def _load_samples(self) -> list[SampleText]:
        samples_file = self.prompts_dir / "samples.yaml"
        if not samples_file.exists():
            return []
        with open(samples_file, "r", encoding="utf-8") as f:
            raw_samples = yaml.safe_load(f) or []
        return [SampleText(**sample) for sample in raw_samples]

    def get_sample_texts(self) -> Dict[str, str]:
        """Sample texts keyed by display name, in file order."""
        return {sample.name: sample.text for sample in self.samples}

    def render_prompt(self, key: str, **context) -> str:
        """Render one of the templates listed in metadata.yaml."""
        metadata = self.metadata.get(key)
        if not metadata:
            raise ValueError(f"Unknown prompt: {key}")

        try:
            template = self.jinja_env.get_template(metadata.file)
        except TemplateNotFound:
            raise ValueError(f"Template file not found: {metadata.file}")
        return template.render(**context)

    def system_prompt(self) -> str:
        return self.render_prompt(
            "system",
            score_min=int(SCORE_MIN),
            score_max=int(SCORE_MAX),
            styles=[style.value for style in KTSStyle],
        )

    def build_request(self, source: InputSource) -> AnalysisRequest:
        """
        Build the outbound request for one analysis.

        Args:
            source: Plain text or a binary document

        Returns:
            AnalysisRequest ready to send

        Raises:
            EmptyInputError: If there is nothing to analyse
        """
        if is_empty_source(source):
            raise EmptyInputError()

        if isinstance(source, BinaryDocument):
            content = [
                {
                    "type": "document",
                    "source": {
                        "type": "base64",
                        "media_type": source.mime_type,
                        "data": source.encoded_bytes,
                    },
                },
                {"type": "text", "text": self.render_prompt("document")},
            ]
        else:
            text = truncate_text(source.text, self.text_limit)
            if len(text) < len(source.text):
                logger.info("Truncated input from %d to %d characters", len(source.text), len(text))
            content = self.render_prompt("text", text=text)

        return AnalysisRequest(
            model=self.model_name,
            max_tokens=self.max_tokens,
            system=self.system_prompt(),
            messages=[{"role": "user", "content": content}],
        )

    def parse_response(self, data: dict) -> AnalysisResult:
        """
        Validate a boundary response and parse the classification out of it.

        Raises:
            RemoteError: If the response carries an error field
            ResponseParseError: If there is no usable text or it fails the schema
        """
        if not isinstance(data, dict):
            logger.error("Unexpected response type: %s", type(data).__name__)
            raise ResponseParseError()

        error = data.get("error")
        if isinstance(error, dict):
            error = error.get("message") or error.get("type")
        if error:
            raise RemoteError(str(error))

        response_text = collect_text_blocks(data)
        if not response_text:
            logger.error("Response contained no text content")
            raise ResponseParseError()

        clean = strip_code_fences(response_text)
        try:
            parsed = json.loads(clean)
            result = AnalysisResult.model_validate(parsed)
        except (ValueError, ValidationError) as e:
            logger.error("Could not parse analysis response: %s", e)
            logger.debug("Raw response text: %s", response_text)
            raise ResponseParseError() from e

        if not result.style_matches_quadrant:
            logger.warning(
                "Reported style %s does not match score quadrant %s (%.1f, %.1f)",
                result.style.value,
                result.quadrant_style.value,
                result.uncertainty_score,
                result.possibility_score,
            )

        return result

    def analyze(self, source: InputSource) -> AnalysisResult:
        """
        Classify the given input with a single request.

        Args:
            source: Plain text or a binary document

        Returns:
            Validated AnalysisResult

        Raises:
            EmptyInputError: If there is nothing to analyse (no request is sent)
            NetworkError: If the request could not be completed
            RemoteError: If the boundary reported an error
            ResponseParseError: If the response could not be parsed
        """
        request = self.build_request(source)

        logger.info("Sending analysis request (model=%s, provider=%s)", request.model, self.provider.display_name)
        try:
            data = self.provider.send(request)
        except requests.RequestException as e:
            logger.error("Analysis request failed: %s", e)
            raise NetworkError() from e

        return self.parse_response(data)


def run_analysis(state: UIState, service: AnalysisService) -> UIState:
    """
    Run one analysis for the current input and fold the outcome into state.

    A no-op while another analysis is loading or when the input is empty.
    """
    if state.loading or is_empty_source(state.source):
        return state

    state = reduce(state, AnalysisStarted())
    request_id = state.request_id

    try:
        result = service.analyze(state.source)
    except KTSAnalyzerError as e:
        return reduce(state, AnalysisFailed(request_id=request_id, message=e.user_message))

    return reduce(state, AnalysisSucceeded(request_id=request_id, result=result))
