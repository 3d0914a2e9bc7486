"""End-to-end tests for the preview transform.

Builds in-memory document stores the way a site build would and runs
the transform returned by ``preview()`` over them.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from content_preview import strategy
from content_preview.config import PreviewConfig
from content_preview.exceptions import InvalidArgumentError
from content_preview.plugin import preview
from tests.conftest import make_document

LOREM = "Lorem ipsum dolor sit amet, consectetur adipiscing elit."


def _run(options, files):
    done = MagicMock()
    preview(options)(files, None, done)
    return done


class TestCompletion:
    def test_done_called_once_on_success(self):
        done = _run({"words": 3}, {"a.md": make_document(LOREM)})
        done.assert_called_once_with(None)

    def test_done_called_once_when_nothing_matches(self):
        files = {"test.txt": make_document(LOREM)}
        done = _run({"pattern": "*.md", "words": 3}, files)
        done.assert_called_once_with(None)
        assert "preview" not in files["test.txt"]

    def test_done_called_once_for_empty_store(self):
        done = _run({"words": 3}, {})
        done.assert_called_once_with(None)

    def test_invalid_budget_fails_the_batch(self):
        files = {"a.md": make_document(LOREM), "b.md": make_document(LOREM)}
        done = MagicMock()
        with pytest.raises(InvalidArgumentError):
            preview({"characters": 2})(files, None, done)
        done.assert_called_once()
        assert isinstance(done.call_args.args[0], InvalidArgumentError)
        assert "preview" not in files["b.md"]

    def test_unexpected_error_still_completes(self):
        files = {"a.md": 42}
        done = MagicMock()
        with pytest.raises(TypeError):
            preview({"words": 3})(files, None, done)
        done.assert_called_once()
        assert isinstance(done.call_args.args[0], TypeError)

    def test_error_log_names_the_document(self, caplog):
        with caplog.at_level(logging.ERROR, logger="content_preview"):
            with pytest.raises(InvalidArgumentError):
                _run({"characters": 2}, {"a.md": make_document(LOREM)})
        record = caplog.records[-1]
        assert record.path == "a.md"
        assert record.error_code == "INVALID_ARGUMENT"


class TestSelection:
    def test_every_matched_file_is_attached(self):
        files = {"a": make_document(LOREM), "b": make_document(LOREM), "c": make_document(LOREM)}
        with patch("content_preview.plugin.attach_preview") as attach:
            _run({}, files)
        assert attach.call_count == 3
        assert [c.args[3] for c in attach.call_args_list] == ["a", "b", "c"]

    def test_nothing_attached_without_matches(self):
        with patch("content_preview.plugin.attach_preview") as attach:
            _run({"pattern": "*.md"}, {"test.txt": make_document(LOREM)})
        attach.assert_not_called()

    def test_extractor_selected_once_per_run(self):
        files = {f"{i}.md": make_document(LOREM) for i in range(5)}
        with patch("content_preview.plugin.select_extractor", wraps=strategy.select_extractor) as select:
            _run({"words": 2}, files)
        assert select.call_count == 1

    def test_pattern_restricts_documents(self):
        files = {"post.md": make_document(LOREM), "style.css": make_document("body {}")}
        _run({"pattern": ["**/*.md"], "words": 2}, files)
        assert files["post.md"]["preview"] == "Lorem ipsum..."
        assert "preview" not in files["style.css"]

    def test_accepts_resolved_config(self):
        files = {"a.md": make_document(LOREM)}
        _run(PreviewConfig.from_options({"words": 1}), files)
        assert files["a.md"]["preview"] == "Lorem..."

    def test_logs_matched_files(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="content_preview"):
            _run({"words": 1}, {"a.md": make_document(LOREM)})
        assert "Attaching content preview to a.md" in caplog.text

    def test_logs_when_nothing_matches(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="content_preview"):
            _run({"pattern": "*.md"}, {"a.txt": make_document(LOREM)})
        assert "No files matched" in caplog.text


class TestScenarios:
    def test_word_preview(self):
        files = {"a.md": make_document("Lorem ipsum dolor sit amet")}
        _run({"words": 3}, files)
        assert files["a.md"]["preview"] == "Lorem ipsum dolor..."
        assert files["a.md"]["contents"] == b"Lorem ipsum dolor sit amet"

    def test_character_preview_from_number(self):
        files = {"a.md": make_document(LOREM)}
        _run({"characters": 15}, files)
        assert files["a.md"]["preview"] == "Lorem ipsum ..."

    def test_character_preview_from_mapping(self):
        files = {"a.md": make_document(LOREM)}
        _run({"characters": {"count": 15, "trim": True}}, files)
        assert files["a.md"]["preview"] == "Lorem ipsum..."

    def test_marker_preview_with_defaults(self):
        text = "{{ previewStart }}Etiam fermentum dignissim{{ previewEnd }}reliqua"
        files = {"a.md": make_document(text)}
        _run({}, files)
        assert files["a.md"]["preview"] == "Etiam fermentum dignissim..."
        assert files["a.md"]["contents"] == b"Etiam fermentum dignissimreliqua"

    def test_document_without_markers_gets_empty_preview(self):
        files = {"a.md": make_document(LOREM)}
        _run({}, files)
        assert files["a.md"]["preview"] == "..."
        assert files["a.md"]["contents"] == LOREM.encode()

    def test_default_strip_removes_markup(self):
        files = {"a.md": make_document("Some **bold** text and <b>tags</b> here")}
        _run({"words": 6}, files)
        assert files["a.md"]["preview"] == "Some bold text and tags here..."
        assert b"**bold**" in files["a.md"]["contents"]

    def test_words_win_over_markers(self):
        text = "Intro text {{ previewStart }}marked{{ previewEnd }}"
        files = {"a.md": make_document(text)}
        _run({"words": 2}, files)
        assert files["a.md"]["preview"] == "Intro text..."
        assert files["a.md"]["contents"] == text.encode()

    def test_existing_preview_is_kept(self):
        files = {"a.md": make_document(LOREM, preview="Hand written")}
        _run({"words": 2}, files)
        assert files["a.md"]["preview"] == "Hand written"

    def test_existing_preview_is_replaced_when_ignored(self):
        files = {"a.md": make_document(LOREM, preview="Hand written")}
        _run({"words": 2, "ignoreExistingKey": True}, files)
        assert files["a.md"]["preview"] == "Lorem ipsum..."

    def test_running_twice_changes_nothing(self):
        text = "{{ previewStart }}Etiam fermentum dignissim{{ previewEnd }}reliqua"
        files = {"a.md": make_document(text)}
        transform = preview({})
        transform(files, None, MagicMock())
        once = dict(files["a.md"])
        transform(files, None, MagicMock())
        assert files["a.md"] == once

    def test_string_contents_are_left_alone(self):
        files = {"a.md": {"contents": LOREM}}
        _run({"words": 2}, files)
        assert files["a.md"] == {"contents": LOREM}
