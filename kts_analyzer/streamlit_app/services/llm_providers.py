"""Clients for the remote classification boundary.

Every provider accepts the same Messages-style request and answers with the
same shape: ``{"content": [{"type": "text", "text": ...}, ...]}`` on success
or ``{"error": "<message>"}`` when the service reports a failure. Transport
failures surface as ``requests.RequestException``.
"""

from abc import ABC, abstractmethod
from typing import Optional
import base64
import logging

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
import requests

from kts_analyzer import config
from kts_analyzer.streamlit_app.models import AnalysisRequest
from kts_analyzer.streamlit_app.services.errors import ResponseParseError

logger = logging.getLogger(__name__)


def _decode_json(response: requests.Response) -> Optional[dict]:
    """Response body as a dict, or None if it is not a JSON object."""
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _error_message(data: Optional[dict]) -> Optional[str]:
    """Pull a readable message out of an error body."""
    if not data:
        return None
    error = data.get("error")
    if isinstance(error, dict):
        return error.get("message") or error.get("type")
    return error or None


class ClassificationProvider(ABC):
    """Abstract base class for classification boundary clients."""

    default_model: str

    @abstractmethod
    def send(self, request: AnalysisRequest) -> dict:
        """
        Send one analysis request.

        Args:
            request: Fully built request (model, system prompt, messages)

        Returns:
            Response dict with either a ``content`` block list or an ``error``

        Raises:
            requests.RequestException: If the request could not be completed
        """
        pass

    @property
    def display_name(self) -> str:
        return type(self).__name__.replace("Provider", "")


class ProxyProvider(ClassificationProvider):
    """Local proxy endpoint that forwards requests to the model service."""

    def __init__(self, url: str, default_model: str = config.KTS_MODEL, timeout: int = config.KTS_REQUEST_TIMEOUT):
        """
        Initialize proxy provider.

        Args:
            url: Full URL of the proxy's analyze endpoint
            default_model: Model identifier forwarded in each request
            timeout: Request timeout in seconds
        """
        self.url = url
        self.default_model = default_model
        self.timeout = timeout

    def send(self, request: AnalysisRequest) -> dict:
        """Post the request to the proxy and return its JSON reply."""
        response = requests.post(
            self.url,
            headers={"Content-Type": "application/json"},
            json=request.to_payload(),
            timeout=self.timeout,
        )

        data = _decode_json(response)
        if data is None:
            if response.ok:
                raise ResponseParseError()
            return {"error": f"Proxy error {response.status_code}: {response.reason}"}

        if not response.ok and "error" not in data:
            return {"error": f"Proxy error {response.status_code}: {response.reason}"}

        return data


class AnthropicProvider(ClassificationProvider):
    """Anthropic Messages API provider."""

    API_VERSION = "2023-06-01"

    def __init__(
        self,
        api_key: str,
        default_model: str = config.KTS_MODEL,
        base_url: str = "https://api.anthropic.com",
        timeout: int = config.KTS_REQUEST_TIMEOUT,
    ):
        """
        Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            default_model: Default model to use
            base_url: API root, without the /v1 suffix
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.default_model = default_model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def send(self, request: AnalysisRequest) -> dict:
        """Call the Messages API."""
        response = requests.post(
            f"{self.base_url}/v1/messages",
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": self.API_VERSION,
                "content-type": "application/json",
            },
            json=request.to_payload(),
            timeout=self.timeout,
        )

        data = _decode_json(response)
        if response.ok:
            if data is None:
                raise ResponseParseError()
            return data

        message = _error_message(data) or f"Anthropic API error {response.status_code}: {response.reason}"
        logger.warning("Anthropic API returned %s: %s", response.status_code, message)
        return {"error": message}


class GeminiProvider(ClassificationProvider):
    """Google Gemini direct API provider.

    Translates the Messages-style request: the system prompt becomes the
    model's system instruction and document blocks become inline data parts.
    """

    def __init__(self, api_key: str, default_model: str = config.KTS_GEMINI_MODEL):
        """
        Initialize Gemini provider.

        Args:
            api_key: Google AI API key
            default_model: Default model to use
        """
        self.api_key = api_key
        self.default_model = default_model
        genai.configure(api_key=api_key)

    @staticmethod
    def to_parts(content) -> list:
        """Convert message content (string or block list) to Gemini parts."""
        if isinstance(content, str):
            return [content]

        parts = []
        for block in content:
            if block.get("type") == "text":
                parts.append(block["text"])
            elif block.get("type") == "document":
                source = block["source"]
                parts.append({
                    "mime_type": source["media_type"],
                    "data": base64.b64decode(source["data"]),
                })
        return parts

    def send(self, request: AnalysisRequest) -> dict:
        """Generate with Gemini and wrap the reply as text content."""
        gemini_model = genai.GenerativeModel(request.model, system_instruction=request.system)

        parts = []
        for message in request.messages:
            parts.extend(self.to_parts(message["content"]))

        try:
            response = gemini_model.generate_content(
                parts,
                generation_config=genai.types.GenerationConfig(
                    max_output_tokens=request.max_tokens,
                ),
            )
        except google_exceptions.GoogleAPIError as e:
            logger.warning("Gemini API error: %s", e)
            return {"error": str(e)}

        try:
            text = response.text
        except ValueError:
            # Raised when the candidate was blocked or has no text parts
            return {"content": []}

        return {"content": [{"type": "text", "text": text}], "model": request.model}


def create_provider(
    proxy_url: Optional[str] = None,
    anthropic_api_key: Optional[str] = None,
    gemini_api_key: Optional[str] = None,
    default_model: Optional[str] = None,
) -> ClassificationProvider:
    """
    Factory function to create the appropriate classification provider.

    Precedence:
    1. Local proxy if KTS_PROXY_URL is set
    2. Anthropic if ANTHROPIC_API_KEY is set
    3. Gemini if GOOGLE_API_KEY is set
    4. Raise error if none is set

    Args:
        proxy_url: Proxy endpoint (defaults to KTS_PROXY_URL)
        anthropic_api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY)
        gemini_api_key: Google AI API key (defaults to GOOGLE_API_KEY)
        default_model: Default model to use (provider-specific)

    Returns:
        Configured provider instance

    Raises:
        ValueError: If no boundary is configured
    """
    proxy = proxy_url or config.KTS_PROXY_URL
    anthropic_key = anthropic_api_key or config.ANTHROPIC_API_KEY
    gemini_key = gemini_api_key or config.GOOGLE_API_KEY

    if proxy:
        return ProxyProvider(url=proxy, default_model=default_model or config.KTS_MODEL)
    elif anthropic_key:
        return AnthropicProvider(api_key=anthropic_key, default_model=default_model or config.KTS_MODEL)
    elif gemini_key:
        return GeminiProvider(api_key=gemini_key, default_model=default_model or config.KTS_GEMINI_MODEL)
    else:
        raise ValueError(
            "No classification boundary configured. Set KTS_PROXY_URL, ANTHROPIC_API_KEY or GOOGLE_API_KEY."
        )
