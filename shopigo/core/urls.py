import posixpath
import re
from urllib.parse import urlsplit, urlunsplit, SplitResult

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def validate_url(raw: str) -> SplitResult:
    """
    Parse a URL, raising ValueError when it is not valid URL syntax.

    Both absolute and relative references are accepted.
    """
    if not isinstance(raw, str):
        raise ValueError(f"URL must be a string, got {type(raw).__name__}")
    if _CONTROL_CHARS.search(raw):
        raise ValueError(f"invalid control character in URL {raw!r}")
    if raw.startswith(":"):
        raise ValueError(f"missing protocol scheme in URL {raw!r}")
    if _BAD_ESCAPE.search(raw):
        raise ValueError(f"invalid escape sequence in URL {raw!r}")

    parts = urlsplit(raw)
    if any(ch.isspace() for ch in parts.netloc):
        raise ValueError(f"invalid character in host of URL {raw!r}")
    # Accessing the port validates it.
    parts.port
    return parts


def join_url(base: str, *elements: str) -> str:
    """
    Join path elements onto the path of a base URL.

    The resulting path is cleaned ("." and ".." resolved, duplicate slashes
    collapsed); a trailing slash on the last element is kept.
    """
    parts = validate_url(base)
    for element in elements:
        if _CONTROL_CHARS.search(element):
            raise ValueError(f"invalid control character in path {element!r}")
        if _BAD_ESCAPE.search(element):
            raise ValueError(f"invalid escape sequence in path {element!r}")

    if not elements:
        return urlunsplit(parts)

    path = "/".join([parts.path, *elements])
    cleaned = posixpath.normpath(path) if path else ""
    # normpath keeps a leading "//", a URL path does not
    cleaned = re.sub(r"^/+", "/", cleaned)
    if cleaned == ".":
        cleaned = ""
    if elements[-1].endswith("/") and not cleaned.endswith("/"):
        cleaned += "/"
    if parts.netloc and cleaned and not cleaned.startswith("/"):
        cleaned = "/" + cleaned
    return urlunsplit(parts._replace(path=cleaned))
