"""Tests for typecheck.core.scoring – per-character scoring and render spans."""

from __future__ import annotations

import pytest

from typecheck.core.scoring import (
    SPACE_PLACEHOLDER,
    DocumentScore,
    LineScore,
    RenderSpan,
    ScoreBoard,
    SpanKind,
    score_document,
    score_line,
)


# ---------------------------------------------------------------------------
# score_line – counts
# ---------------------------------------------------------------------------

class TestScoreLineCounts:
    def test_exact_match(self):
        s = score_line("hello", "hello")
        assert (s.correct_chars, s.typed_chars) == (5, 5)

    def test_one_wrong(self):
        s = score_line("abc", "abX")
        assert (s.correct_chars, s.typed_chars) == (2, 3)

    def test_partial_prefix(self):
        s = score_line("hello", "he")
        assert (s.correct_chars, s.typed_chars) == (2, 2)

    def test_extra_characters_count_as_typed_only(self):
        s = score_line("ab", "abcd")
        assert (s.correct_chars, s.typed_chars) == (2, 4)

    def test_empty_typed(self):
        s = score_line("abc", "")
        assert (s.correct_chars, s.typed_chars) == (0, 0)

    def test_empty_target(self):
        s = score_line("", "xyz")
        assert (s.correct_chars, s.typed_chars) == (0, 3)

    def test_no_shift_alignment(self):
        # A missed character is not re-synchronised: everything after is wrong.
        s = score_line("abcd", "acd")
        assert s.correct_chars == 1

    @pytest.mark.parametrize(
        "target, typed",
        [("abc", "abcdef"), ("abcdef", "abc"), ("", ""), ("a b", "a_b"), ("xyz", "zyx")],
    )
    def test_correct_never_exceeds_either_length(self, target: str, typed: str):
        s = score_line(target, typed)
        assert 0 <= s.correct_chars <= min(len(target), len(typed))
        assert s.typed_chars == len(typed)


# ---------------------------------------------------------------------------
# score_line – render spans
# ---------------------------------------------------------------------------

class TestRenderSpans:
    def test_match_then_pending(self):
        s = score_line("hello", "he")
        assert s.spans == (
            RenderSpan("he", SpanKind.MATCH, 0),
            RenderSpan("llo", SpanKind.PENDING, 2),
        )

    def test_mismatch_shows_typed_char(self):
        s = score_line("abc", "aXc")
        assert [span.kind for span in s.spans] == [SpanKind.MATCH, SpanKind.MISMATCH, SpanKind.MATCH]
        assert s.spans[1].text == "X"
        assert s.spans[1].start == 1

    def test_wrong_space_uses_placeholder(self):
        s = score_line("abc", "a c")
        assert s.spans[1] == RenderSpan(SPACE_PLACEHOLDER, SpanKind.MISMATCH, 1)

    def test_extra_space_uses_placeholder(self):
        s = score_line("ab", "ab  x")
        assert s.spans[-1] == RenderSpan(SPACE_PLACEHOLDER * 2 + "x", SpanKind.EXTRA, 2)

    def test_correct_space_is_kept(self):
        s = score_line("a b", "a b")
        assert s.spans == (RenderSpan("a b", SpanKind.MATCH, 0),)

    def test_untyped_line_is_all_pending(self):
        s = score_line("abc", "")
        assert s.spans == (RenderSpan("abc", SpanKind.PENDING, 0),)

    def test_empty_both(self):
        assert score_line("", "").spans == ()

    def test_kind_values(self):
        assert SpanKind.MATCH.value == "match"
        assert SpanKind.PENDING.value == "pending"


# ---------------------------------------------------------------------------
# score_document
# ---------------------------------------------------------------------------

class TestScoreDocument:
    def test_example(self):
        assert score_document(["abc", "def"], ["abX", "def"]) == DocumentScore(5, 6)

    def test_missing_typed_rows(self):
        assert score_document(["abc", "def"], ["abc"]) == DocumentScore(3, 3)

    def test_extra_typed_rows(self):
        assert score_document(["abc"], ["abc", "zz"]) == DocumentScore(3, 5)

    def test_empty(self):
        assert score_document([], []) == DocumentScore(0, 0)

    def test_none_treated_as_empty(self):
        assert score_document(None, ["ab"]) == DocumentScore(0, 2)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# ScoreBoard
# ---------------------------------------------------------------------------

class TestScoreBoard:
    def test_update_and_totals(self):
        board = ScoreBoard()
        board.update(1, "abc", "abX")
        board.update(2, "def", "def")
        assert board.totals() == DocumentScore(5, 6)

    def test_update_replaces_row(self):
        board = ScoreBoard()
        board.update(1, "abc", "x")
        board.update(1, "abc", "abc")
        assert board.get(1).correct_chars == 3
        assert board.totals() == DocumentScore(3, 3)

    def test_missing_row_is_zero(self):
        assert ScoreBoard().get(7) == LineScore()

    def test_reset(self):
        board = ScoreBoard()
        board.update(1, "a", "a")
        board.reset()
        assert board.totals() == DocumentScore(0, 0)

    def test_rebuild_matches_score_document(self):
        target = ["def f():", "    return 1", ""]
        typed = ["def g():", "    ret", ""]
        board = ScoreBoard()
        board.rebuild(target, typed)
        assert board.totals() == score_document(target, typed)
