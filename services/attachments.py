import base64
import binascii
import mimetypes

from models.incident import FileAttachment

DEFAULT_MIME = "application/octet-stream"


def encode_attachment(name: str, data: bytes, mime_type: str | None = None) -> FileAttachment:
    """Embed raw bytes into a self-contained data URL attachment."""
    mime_type = mime_type or mimetypes.guess_type(name)[0] or DEFAULT_MIME
    payload = base64.b64encode(data).decode("ascii")
    return FileAttachment(name=name, url=f"data:{mime_type};base64,{payload}", type=mime_type)


def encode_uploaded_file(uploaded_file) -> FileAttachment:
    """Streamlit UploadedFile -> attachment."""
    return encode_attachment(uploaded_file.name, uploaded_file.getvalue(), uploaded_file.type)


def decode_data_url(url: str) -> tuple[str, bytes]:
    """Return ``(mime_type, data)`` for a base64 data URL."""
    if not url or not url.startswith("data:") or "," not in url:
        raise ValueError("Not a data URL")

    header, payload = url[len("data:"):].split(",", 1)
    parts = header.split(";")
    if "base64" not in parts[1:]:
        raise ValueError("Only base64 data URLs are supported")

    try:
        data = base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
    return parts[0] or DEFAULT_MIME, data
