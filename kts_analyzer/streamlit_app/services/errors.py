"""Errors raised while extracting input and running an analysis.

Every error carries a ``user_message`` that is safe to show on the page.
Underlying causes are logged where they happen and never shown.
"""


class KTSAnalyzerError(Exception):
    """Base class for recoverable analyzer errors."""

    user_message = "Analysis failed. Please try again."

    def __init__(self, message=None):
        super().__init__(message or self.user_message)
        if message is not None:
            self.user_message = message


class UnsupportedFormatError(KTSAnalyzerError):
    """The uploaded file has an extension we cannot handle."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file type: .{extension}. Use PDF, DOCX, or TXT.")


class ExtractionError(KTSAnalyzerError):
    """Reading or parsing an uploaded file failed."""

    user_message = "Could not read file. Please try another format."


class EmptyInputError(KTSAnalyzerError):
    """There is neither text nor a document to analyse."""

    user_message = "Enter some text or upload a document first."


class RemoteError(KTSAnalyzerError):
    """The classification boundary returned an explicit error."""


class ResponseParseError(KTSAnalyzerError):
    """The response had no text content or did not match the result schema."""

    user_message = "Analysis failed. Please try again."


class NetworkError(KTSAnalyzerError):
    """The request could not be sent or completed."""

    user_message = "Could not reach the analysis service. Please try again."
