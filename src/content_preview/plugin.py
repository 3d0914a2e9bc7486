"""Pipeline entry point: build a preview transform from plugin options."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable, Optional

from .attach import attach_preview
from .config import PreviewConfig
from .exceptions import PreviewError
from .matcher import match_paths
from .strategy import select_extractor

logger = logging.getLogger(__name__)

Files = MutableMapping[str, MutableMapping[str, Any]]
Done = Callable[[Optional[BaseException]], Any]
Transform = Callable[[Files, Any, Done], None]


def preview(options: Optional[Mapping[str, Any]] = None) -> Transform:
    """
    Create a transform that attaches content previews to matched documents.

    Options are resolved once into a ``PreviewConfig``; invalid values fall
    back to defaults. When ``words``, ``characters`` and ``marker`` are all
    present, ``words`` takes precedence, then ``characters``, then ``marker``.

    Example::

        transform = preview({"pattern": "*.md", "words": 40})
        transform(files, site, done)

    The returned callable takes the document store, the host pipeline
    context (not inspected) and a completion callback. The callback is
    invoked exactly once: with ``None`` once every matched document is
    processed, or with the exception that stopped the batch, which is
    then re-raised.
    """
    config = options if isinstance(options, PreviewConfig) else PreviewConfig.from_options(options)

    def transform(files: Files, pipeline: Any, done: Done) -> None:
        preview_set = match_paths(files.keys(), config.pattern)

        if not preview_set:
            logger.debug("No files matched the pattern %s", list(config.pattern))
            done(None)
            return

        extractor = select_extractor(config)
        try:
            for file_path in preview_set:
                logger.debug("Attaching content preview to %s", file_path, extra={"path": file_path})
                attach_preview(extractor, config, files, file_path)
        except PreviewError as exc:
            logger.error(
                "Preview generation failed for %s: %s", file_path, exc.message,
                extra={"path": file_path, "error_code": exc.error_code.value},
            )
            done(exc)
            raise
        except Exception as exc:
            logger.exception("Unexpected error while previewing %s", file_path, extra={"path": file_path})
            done(exc)
            raise

        done(None)

    return transform
