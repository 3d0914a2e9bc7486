"""Attach a computed preview to a single document record."""

import logging
from collections.abc import MutableMapping
from typing import Any

from .config import PreviewConfig
from .extractors import Extractor

logger = logging.getLogger(__name__)


def attach_preview(
    extractor: Extractor,
    config: PreviewConfig,
    files: MutableMapping[str, MutableMapping[str, Any]],
    file_path: str,
) -> bool:
    """
    Generate a preview for ``files[file_path]`` and store it on the record.

    Runs only when the record lacks ``config.key`` (or overwriting is
    allowed) and its contents are bytes. The extractor's contents replace
    the record's, which is how marker removal reaches the output.

    Returns:
        True if a preview was written, False if the record was skipped
    """
    file_data = files[file_path]

    if config.key in file_data and not config.ignore_existing_key:
        logger.debug("Keeping existing '%s' on %s", config.key, file_path, extra={"path": file_path})
        return False

    if not isinstance(file_data.get("contents"), (bytes, bytearray)):
        logger.debug("Skipping %s: contents are not bytes", file_path, extra={"path": file_path})
        return False

    result = extractor(file_data)
    preview = result.preview.strip() if config.should_trim else result.preview
    file_data[config.key] = preview + config.continue_indicator
    file_data["contents"] = result.contents
    return True
