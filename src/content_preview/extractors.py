"""Preview extractors.

Each extractor takes its static parameters followed by a document record
and returns a ``PreviewResult``. Word and character previews leave the
document body untouched; marker previews return the body with the
markers cut out.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .exceptions import InvalidArgumentError, MalformedDocumentError
from .strip import StripRule, as_strip_rule

Contents = Union[bytes, bytearray]
Extractor = Callable[[Mapping[str, Any]], "PreviewResult"]


@dataclass(frozen=True)
class PreviewResult:
    """A computed preview plus the document body to store back."""

    preview: str
    contents: Contents


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _read_contents(file_data: Optional[Mapping[str, Any]]) -> Contents:
    if not isinstance(file_data, Mapping) or "contents" not in file_data:
        raise MalformedDocumentError("document has no 'contents' field")
    return file_data["contents"]


def _decode(contents: Any, errors: str = "replace") -> str:
    if isinstance(contents, (bytes, bytearray)):
        return bytes(contents).decode("utf-8", errors=errors)
    if isinstance(contents, str):
        return contents
    raise MalformedDocumentError(
        f"'contents' must be bytes or text, got {type(contents).__name__}"
    )


def collapse_whitespace(text: str) -> str:
    """Split on whitespace runs and rejoin with single spaces."""
    return " ".join(text.split())


def word_preview(
    word_count: int,
    strip: Optional[StripRule],
    file_data: Mapping[str, Any],
) -> PreviewResult:
    """
    Generate a preview from the first ``word_count`` words.

    Args:
        word_count: Word limit for the preview; must be a positive integer
        strip: Rule applied to the joined preview (``None`` strips nothing)
        file_data: Document record holding ``contents``

    Returns:
        PreviewResult whose ``contents`` is the original object

    Raises:
        InvalidArgumentError: word_count is not a positive integer
        MalformedDocumentError: the record has no decodable contents
    """
    if not _is_positive_int(word_count):
        raise InvalidArgumentError(
            "Generating a word count preview requires a positive integer.",
            argument="word_count",
            value=word_count,
        )

    contents = _read_contents(file_data)
    words = _decode(contents).split()[:word_count]
    preview = as_strip_rule(strip).remove(" ".join(words))
    return PreviewResult(preview=preview, contents=contents)


def character_preview(
    char_count: int,
    strip: Optional[StripRule],
    file_data: Mapping[str, Any],
    word_extractor: Callable[..., PreviewResult] = word_preview,
) -> PreviewResult:
    """
    Generate a preview of at most ``char_count`` characters.

    Words are requested from ``word_extractor`` assuming an average of two
    characters per word (separators included), then the result is cut to
    ``char_count``. A text of long words can come back shorter than the
    limit; that estimate is not retried.

    Raises:
        InvalidArgumentError: char_count is not a positive integer
    """
    if not _is_positive_int(char_count):
        raise InvalidArgumentError(
            "Generating a character count preview requires a positive integer.",
            argument="char_count",
            value=char_count,
        )

    word_estimate = math.ceil(char_count / 2)
    result = word_extractor(word_estimate, strip, file_data)
    return PreviewResult(preview=result.preview[:char_count], contents=result.contents)


def marker_preview(
    marker_start: Optional[str],
    marker_end: Optional[str],
    strip: Optional[StripRule],
    file_data: Mapping[str, Any],
) -> PreviewResult:
    """
    Generate a preview from the text delimited by start and/or end markers.

    The first start marker is located, then the first end marker after
    it (or the first end marker anywhere when there is no start). With
    both found the preview is the text between them; with only the start
    marker it runs to the end of the document; with only the end marker
    it runs from the beginning. Found markers are removed from the
    returned contents. The preview itself has its whitespace collapsed
    so multi-line spans read as one line.

    Missing markers are not an error: the preview is empty and the
    original contents object is returned. Bytes that are not valid UTF-8
    survive marker removal unchanged.
    """
    contents = _read_contents(file_data)
    text = _decode(contents, errors="surrogateescape")
    start_index = text.find(marker_start) if marker_start else -1

    if start_index >= 0:
        span_start = start_index + len(marker_start)
        end_index = text.find(marker_end, span_start) if marker_end else -1
    else:
        end_index = text.find(marker_end) if marker_end else -1

    if start_index < 0 and end_index < 0:
        return PreviewResult(preview="", contents=contents)

    if start_index >= 0:
        if end_index >= 0:
            span_end = end_index
            tail_start = end_index + len(marker_end)
        else:
            span_end = tail_start = len(text)

        preview = text[span_start:span_end]
        text = text[:start_index] + preview + text[tail_start:]
    else:
        preview = text[:end_index]
        text = preview + text[end_index + len(marker_end):]

    # Undecodable bytes show up in the preview as U+FFFD.
    preview = preview.encode("utf-8", errors="surrogateescape").decode("utf-8", errors="replace")
    preview = collapse_whitespace(as_strip_rule(strip).remove(preview))
    return PreviewResult(
        preview=preview,
        contents=text.encode("utf-8", errors="surrogateescape"),
    )


def empty_preview(file_data: Mapping[str, Any]) -> PreviewResult:
    """Extractor used when no preview mode is configured."""
    return PreviewResult(preview="", contents=_read_contents(file_data))


__all__ = [
    "Extractor",
    "PreviewResult",
    "character_preview",
    "collapse_whitespace",
    "empty_preview",
    "marker_preview",
    "word_preview",
]
