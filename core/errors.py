"""Error kinds shared by the gateway, the HTTP layer and the UI.

Every error carries a short user-facing ``title`` and ``message`` (what a
toast shows) and the HTTP ``status_code`` the API answers with. ``str(err)``
is the developer-facing detail.
"""
from typing import Dict, Optional, Type


class PdfQnaError(Exception):
    title = "An Error Occurred"
    message = "Failed to get an answer. Please try again."
    status_code = 500

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidFileType(PdfQnaError):
    title = "Invalid File Type"
    message = "Please upload a PDF file."
    status_code = 415


class FileReadFailure(PdfQnaError):
    title = "File Read Error"
    message = "There was an error reading the file."
    status_code = 400


class MissingInput(PdfQnaError):
    title = "Missing Input"
    message = "Please upload a PDF and enter a question."
    status_code = 400


class ModelInvocationFailure(PdfQnaError):
    message = "The language model could not be reached. Please try again."
    status_code = 502


class InvalidOutput(PdfQnaError):
    message = "The language model returned an answer in an unexpected format."
    status_code = 502


ERROR_KINDS: Dict[str, Type[PdfQnaError]] = {
    cls.__name__: cls
    for cls in (InvalidFileType, FileReadFailure, MissingInput, ModelInvocationFailure, InvalidOutput)
}


def error_from_kind(kind: Optional[str], detail: Optional[str] = None) -> PdfQnaError:
    """Rebuild an error from the ``kind`` field of an API error body."""
    cls = ERROR_KINDS.get(kind or "", PdfQnaError)
    return cls(detail)
