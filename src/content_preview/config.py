"""Configuration for the preview transform.

Two layers live here:

* ``PreviewConfig`` - the frozen, fully typed plugin configuration. It is
  resolved once from the loose option mapping a site build passes in.
  Every option coerces at this boundary: values of the wrong type fall
  back to their documented default instead of raising, so the extractors
  only ever see clean values.
* ``Settings`` - process-level settings (logging) read from the
  environment, used by the command-line driver.
"""

from collections.abc import Mapping
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, Field, InstanceOf, ValidationInfo, field_validator
from pydantic_settings import BaseSettings

from .strip import DEFAULT_STRIP, LiteralStrip, PatternStrip, StripRule, as_strip_rule

DEFAULT_PATTERN = ("**/*",)
DEFAULT_KEY = "preview"
DEFAULT_CONTINUE_INDICATOR = "..."
DEFAULT_MARKER_START = "{{ previewStart }}"
DEFAULT_MARKER_END = "{{ previewEnd }}"

_VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_VALID_LOG_FORMATS = ["json", "text"]


def _field_default(cls: type, info: ValidationInfo) -> Any:
    return cls.model_fields[info.field_name].default


def _coerce_count(value: Any) -> Optional[int]:
    """Coerce a loosely typed count to ``int``; ``None`` if impossible."""
    # bool is an int subclass but never a meaningful count.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class CharacterOptions(BaseModel):
    """Character-count mode options (``characters: {count, trim}``)."""

    model_config = {"frozen": True}

    count: int = 0
    trim: bool = False

    @field_validator("count", mode="before")
    @classmethod
    def coerce_count(cls, v: Any, info: ValidationInfo) -> int:
        count = _coerce_count(v)
        return _field_default(cls, info) if count is None else count

    @field_validator("trim", mode="before")
    @classmethod
    def coerce_trim(cls, v: Any, info: ValidationInfo) -> bool:
        return v if isinstance(v, bool) else _field_default(cls, info)


class MarkerOptions(BaseModel):
    """Delimiters for marker mode. An empty string disables that side."""

    model_config = {"frozen": True}

    start: str = DEFAULT_MARKER_START
    end: str = DEFAULT_MARKER_END

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_marker(cls, v: Any, info: ValidationInfo) -> str:
        return v if isinstance(v, str) else _field_default(cls, info)


class PreviewConfig(BaseModel):
    """
    Resolved preview configuration.

    When ``words``, ``characters`` and ``marker`` are all set, ``words``
    wins, then ``characters``, then ``marker``. Markdown and HTML syntax
    is stripped from the preview by default.

    Both the camelCase option names used by site configs (``ignoreExistingKey``,
    ``continueIndicator``) and the snake_case field names are accepted.
    """

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [
                {
                    "pattern": "*.md",
                    "key": "preview",
                    "ignoreExistingKey": True,
                    "continueIndicator": "...",
                    "words": 40,
                    "characters": {"count": 42, "trim": True},
                    "marker": {"start": DEFAULT_MARKER_START, "end": DEFAULT_MARKER_END},
                }
            ]
        },
    }

    pattern: Tuple[str, ...] = Field(
        default=DEFAULT_PATTERN,
        description="Glob pattern(s) selecting the documents to preview"
    )
    key: str = Field(
        default=DEFAULT_KEY,
        description="Metadata key the preview is written to"
    )
    ignore_existing_key: bool = Field(
        default=False,
        alias="ignoreExistingKey",
        description="Overwrite a preview that is already present"
    )
    continue_indicator: str = Field(
        default=DEFAULT_CONTINUE_INDICATOR,
        alias="continueIndicator",
        description="Suffix appended to every preview"
    )
    strip: Union[InstanceOf[LiteralStrip], InstanceOf[PatternStrip]] = Field(
        default=DEFAULT_STRIP,
        description="Literal text or regular expression removed from the preview"
    )
    trim: bool = Field(
        default=False,
        description="Trim surrounding whitespace from the preview"
    )
    words: int = Field(default=0, description="Word limit; > 0 enables word mode")
    characters: CharacterOptions = Field(
        default_factory=CharacterOptions,
        description="Character limit; count > 0 enables character mode"
    )
    marker: MarkerOptions = Field(
        default_factory=MarkerOptions,
        description="Start/end markers delimiting the preview"
    )

    @field_validator("pattern", mode="before")
    @classmethod
    def coerce_pattern(cls, v: Any, info: ValidationInfo) -> Tuple[str, ...]:
        if isinstance(v, str):
            return (v,)
        if isinstance(v, (list, tuple)) and all(isinstance(p, str) for p in v):
            return tuple(v)
        return _field_default(cls, info)

    @field_validator("key", "continue_indicator", mode="before")
    @classmethod
    def coerce_string(cls, v: Any, info: ValidationInfo) -> str:
        return v if isinstance(v, str) else _field_default(cls, info)

    @field_validator("ignore_existing_key", "trim", mode="before")
    @classmethod
    def coerce_bool(cls, v: Any, info: ValidationInfo) -> bool:
        return v if isinstance(v, bool) else _field_default(cls, info)

    @field_validator("strip", mode="before")
    @classmethod
    def coerce_strip(cls, v: Any, info: ValidationInfo) -> StripRule:
        try:
            return as_strip_rule(v)
        except TypeError:
            return _field_default(cls, info)

    @field_validator("words", mode="before")
    @classmethod
    def coerce_words(cls, v: Any, info: ValidationInfo) -> int:
        count = _coerce_count(v)
        return _field_default(cls, info) if count is None else count

    @field_validator("characters", mode="before")
    @classmethod
    def coerce_characters(cls, v: Any) -> Any:
        if isinstance(v, CharacterOptions):
            return v
        if isinstance(v, Mapping):
            return dict(v)
        # A bare number is shorthand for {"count": n}.
        return {"count": v}

    @field_validator("marker", mode="before")
    @classmethod
    def coerce_marker(cls, v: Any) -> Any:
        if isinstance(v, MarkerOptions):
            return v
        if isinstance(v, Mapping):
            return dict(v)
        return {}

    @property
    def should_trim(self) -> bool:
        """Top-level ``trim`` and ``characters.trim`` are independent switches."""
        return self.trim or self.characters.trim

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "PreviewConfig":
        """Resolve a loose option mapping; non-mappings resolve to all defaults."""
        if not isinstance(options, Mapping):
            options = {}
        return cls.model_validate(dict(options))


class Settings(BaseSettings):
    """
    Process settings for the command-line driver.

    Read from ``PREVIEW_*`` environment variables or a ``.env`` file.
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="text",
        description="Log output format: 'json' for structured, 'text' for human-readable"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        v_upper = v.upper()
        if v_upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level. Must be one of: {_VALID_LOG_LEVELS}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in _VALID_LOG_FORMATS:
            raise ValueError(f"Invalid log format. Must be one of: {_VALID_LOG_FORMATS}")
        return v_lower

    class Config:
        """Pydantic configuration."""
        env_prefix = "PREVIEW_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
