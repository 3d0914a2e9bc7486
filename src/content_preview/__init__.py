from content_preview.attach import attach_preview
from content_preview.config import CharacterOptions, MarkerOptions, PreviewConfig, Settings
from content_preview.exceptions import ErrorCode, InvalidArgumentError, MalformedDocumentError, PreviewError
from content_preview.extractors import PreviewResult, character_preview, marker_preview, word_preview
from content_preview.matcher import match_paths
from content_preview.plugin import preview
from content_preview.strategy import (
    CharacterMode,
    MarkerMode,
    NoMode,
    WordMode,
    resolve_mode,
    select_extractor,
)
from content_preview.strip import DEFAULT_STRIP, LiteralStrip, PatternStrip

__all__ = [
    "preview",
    "PreviewConfig",
    "CharacterOptions",
    "MarkerOptions",
    "Settings",
    "PreviewResult",
    "word_preview",
    "character_preview",
    "marker_preview",
    "attach_preview",
    "select_extractor",
    "resolve_mode",
    "WordMode",
    "CharacterMode",
    "MarkerMode",
    "NoMode",
    "match_paths",
    "LiteralStrip",
    "PatternStrip",
    "DEFAULT_STRIP",
    "ErrorCode",
    "PreviewError",
    "InvalidArgumentError",
    "MalformedDocumentError",
]
