"""Preview strategy selection.

Word, character and marker modes are mutually exclusive. The active mode
is decided once per configuration with a fixed precedence and then bound
to its extractor, so documents never re-derive it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Union

from .config import PreviewConfig
from .extractors import (
    Extractor,
    character_preview,
    empty_preview,
    marker_preview,
    word_preview,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordMode:
    count: int


@dataclass(frozen=True)
class CharacterMode:
    # Budget left once the continuation indicator is accounted for.
    count: int


@dataclass(frozen=True)
class MarkerMode:
    start: str
    end: str


@dataclass(frozen=True)
class NoMode:
    pass


PreviewMode = Union[WordMode, CharacterMode, MarkerMode, NoMode]


def resolve_mode(config: PreviewConfig) -> PreviewMode:
    """
    Pick the active preview mode.

    Precedence: words, then characters, then markers, then nothing. The
    character budget has the continuation indicator's length taken off so
    preview plus indicator stays within the configured count.
    """
    if config.words > 0:
        return WordMode(config.words)

    if config.characters.count > 0:
        return CharacterMode(config.characters.count - len(config.continue_indicator))

    if config.marker.start or config.marker.end:
        return MarkerMode(start=config.marker.start, end=config.marker.end)

    return NoMode()


def select_extractor(config: PreviewConfig) -> Extractor:
    """Bind the extractor for the configured mode to its static parameters."""
    mode = resolve_mode(config)
    logger.debug("Selected preview mode %s", mode)

    if isinstance(mode, WordMode):
        return partial(word_preview, mode.count, config.strip)
    if isinstance(mode, CharacterMode):
        return partial(character_preview, mode.count, config.strip)
    if isinstance(mode, MarkerMode):
        return partial(marker_preview, mode.start, mode.end, config.strip)
    return empty_preview
