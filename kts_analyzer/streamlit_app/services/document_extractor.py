"""Turn uploaded files into text or a document payload for the model.

Plain text formats are decoded locally, DOCX text is extracted locally,
and PDFs are passed through base64-encoded so the classification boundary
can extract them itself.
"""

from __future__ import annotations

import base64
import logging
from abc import ABC, abstractmethod
from io import BytesIO
from typing import Optional

import docx

from kts_analyzer.streamlit_app.models import (
    ExtractionFailure,
    ExtractionResult,
    PassthroughBinary,
    TextExtraction,
)
from kts_analyzer.streamlit_app.services.errors import ExtractionError, UnsupportedFormatError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = ("txt", "md", "csv")
PDF_MIME_TYPE = "application/pdf"

# Extensions offered by the upload widget; csv is handled but not advertised
UPLOAD_EXTENSIONS = ["pdf", "docx", "txt", "md"]


class DocxTextReader(ABC):
    """Something that can pull plain text out of a word-processing document."""

    @abstractmethod
    def extract_text(self, data: bytes) -> str:
        """
        Extract raw text from a DOCX document.

        Args:
            data: Raw file content

        Returns:
            The document text, paragraphs separated by newlines
        """
        pass


class PythonDocxReader(DocxTextReader):
    """DOCX text extraction with python-docx."""

    def extract_text(self, data: bytes) -> str:
        document = docx.Document(BytesIO(data))
        return "\n".join(paragraph.text for paragraph in document.paragraphs)


def file_extension(file_name: str) -> str:
    """Lowercased text after the last dot (the whole name if there is none)."""
    return file_name.rsplit(".", 1)[-1].lower()


class DocumentExtractor:
    """Extracts analysable content from uploaded files."""

    def __init__(self, docx_reader: Optional[DocxTextReader] = None):
        self.docx_reader = docx_reader or PythonDocxReader()

    def extract(self, file_name: str, data: bytes) -> ExtractionResult:
        """
        Process one uploaded file.

        Args:
            file_name: Name of the uploaded file, used for dispatch and labels
            data: Raw file content

        Returns:
            TextExtraction, PassthroughBinary, or ExtractionFailure
        """
        ext = file_extension(file_name)

        if ext not in TEXT_EXTENSIONS and ext not in ("pdf", "docx"):
            error = UnsupportedFormatError(ext)
            logger.info("Rejected upload %s: unsupported extension .%s", file_name, ext)
            return ExtractionFailure(reason=error.user_message)

        try:
            if ext in TEXT_EXTENSIONS:
                text = data.decode("utf-8-sig")
                return TextExtraction(content=text, file_name=file_name)

            if ext == "pdf":
                encoded = base64.b64encode(data).decode("ascii")
                logger.debug("Passing %s through as PDF (%d bytes)", file_name, len(data))
                return PassthroughBinary(
                    file_name=file_name,
                    mime_type=PDF_MIME_TYPE,
                    encoded_bytes=encoded,
                )

            text = self.docx_reader.extract_text(data)
            return TextExtraction(content=text, file_name=file_name)

        except Exception:
            logger.exception("Failed to read uploaded file %s", file_name)
            return ExtractionFailure(reason=ExtractionError().user_message)

    def extract_upload(self, uploaded_file) -> ExtractionResult:
        """Extract from a Streamlit ``UploadedFile`` (anything with name and getvalue)."""
        return self.extract(uploaded_file.name, uploaded_file.getvalue())


def extract_document(file_name: str, data: bytes) -> ExtractionResult:
    """Extract with the default DOCX reader."""
    return DocumentExtractor().extract(file_name, data)
