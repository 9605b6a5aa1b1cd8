"""Access token discovery.

Sources are consulted in priority order and the first non-empty value wins:

1. HF_TOKEN
2. HUGGING_FACE_HUB_TOKEN
3. the file named by HF_TOKEN_PATH
4. $HF_HOME/token
5. ~/.cache/huggingface/token
6. ~/.huggingface/token
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from .settings import TokenSettings

logger = logging.getLogger(__name__)


def _read_token_file(path: Path) -> str | None:
    """Read a token file, treating any read failure as absent."""
    try:
        return path.expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _token_sources(settings: TokenSettings, home: Path) -> Iterator[tuple[str, Callable[[], str | None]]]:
    yield "HF_TOKEN", lambda: settings.hf_token
    yield "HUGGING_FACE_HUB_TOKEN", lambda: settings.hugging_face_hub_token
    if settings.hf_token_path:
        token_path = Path(settings.hf_token_path)
        yield f"HF_TOKEN_PATH ({token_path})", lambda: _read_token_file(token_path)
    if settings.hf_home:
        hf_home_token = Path(settings.hf_home).expanduser() / "token"
        yield f"HF_HOME ({hf_home_token})", lambda: _read_token_file(hf_home_token)
    for path in (home / ".cache/huggingface/token", home / ".huggingface/token"):
        yield str(path), lambda path=path: _read_token_file(path)


def find_token(settings: TokenSettings | None = None, home: Path | None = None) -> tuple[str, str] | None:
    """Return (source, token) for the first source with a non-empty token."""
    settings = settings or TokenSettings()
    home = home or Path.home()
    for source, read in _token_sources(settings, home):
        value = read()
        token = value.strip() if value else ""
        if token:
            logger.debug("Using hub token from %s", source)
            return source, token
        logger.debug("No hub token in %s", source)
    return None


def resolve_token(settings: TokenSettings | None = None, home: Path | None = None) -> str | None:
    """Resolve the hub access token, or None if no source provides one.

    Values are stripped of surrounding whitespace, so a source holding only
    whitespace counts as absent and resolution moves on to the next one.
    """
    found = find_token(settings, home)
    return found[1] if found else None
