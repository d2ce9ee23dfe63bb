"""Inline binary content as ``data:<mime>;base64,<payload>`` strings."""
import base64
import binascii
import re
from typing import NamedTuple

DEFAULT_MIME_TYPE = "text/plain"

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[^;,]*)(?P<params>(?:;[^;,]*)*?)(?P<base64>;base64)?,(?P<payload>.*)$",
    re.DOTALL,
)


class DataUriError(ValueError):
    pass


class DataUri(NamedTuple):
    mime_type: str
    data: bytes


def encode_data_uri(data: bytes, mime_type: str) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_uri(uri: str) -> DataUri:
    """Split a base64 data URI into its MIME type and raw bytes.

    MIME parameters (``;name=report.pdf``) are accepted and dropped. Only
    base64 payloads are supported since that is what browsers and
    ``encode_data_uri`` produce.
    """
    if not isinstance(uri, str):
        raise DataUriError("data URI must be a string")

    match = _DATA_URI_RE.match(uri.strip())
    if match is None:
        raise DataUriError("not a data URI (expected 'data:<mimetype>;base64,<encoded_data>')")
    if not match.group("base64"):
        raise DataUriError("data URI must use base64 encoding")

    mime_type = match.group("mime").strip().lower() or DEFAULT_MIME_TYPE
    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DataUriError(f"invalid base64 payload: {exc}") from exc

    return DataUri(mime_type=mime_type, data=data)
