"""Tests for the bad-character pattern preprocessing."""

import pytest

from screenseek.exceptions import InvalidArgumentError
from screenseek.find.pattern_heuristic import BadCharacterPattern, analyze_row, best_row
from screenseek.model.element import PixelImage, argb

A = argb(255, 255, 0, 0)
B = argb(255, 0, 255, 0)
C = argb(255, 0, 0, 255)
D = argb(255, 9, 9, 9)
T = argb(0, 0, 0, 0)


class TestAnalyzeRow:
    """Tests for analyze_row()."""

    def test_shift_table_of_opaque_row(self, image_from_rows):
        pattern = image_from_rows([[A, B, C, D]])
        analysis = analyze_row(pattern, 0)

        assert analysis.row_index == 0
        assert analysis.trailing_transparent_count == 0
        assert analysis.distinct_opaque_color_count == 4
        assert dict(analysis.color_to_shift) == {A: 3, B: 2, C: 1}

    def test_rightmost_occurrence_wins(self, image_from_rows):
        pattern = image_from_rows([[A, B, A, C]])
        assert dict(analyze_row(pattern, 0).color_to_shift) == {A: 1, B: 2}

    def test_last_column_color_is_removed(self, image_from_rows):
        pattern = image_from_rows([[A, B, A]])
        analysis = analyze_row(pattern, 0)

        # A also occurs at column 0, the entry is removed nonetheless
        assert A not in analysis.color_to_shift
        assert dict(analysis.color_to_shift) == {B: 1}
        assert analysis.distinct_opaque_color_count == 2

    def test_trailing_transparency_is_contiguous(self, image_from_rows):
        pattern = image_from_rows([[T, A, T, T]])
        analysis = analyze_row(pattern, 0)

        assert analysis.trailing_transparent_count == 2
        assert analysis.has_transparency
        assert dict(analysis.color_to_shift) == {A: 2}

    def test_transparency_left_of_opaque_end_is_not_trailing(self, image_from_rows):
        pattern = image_from_rows([[T, A, B]])
        assert analyze_row(pattern, 0).trailing_transparent_count == 0

    def test_fully_transparent_row(self, image_from_rows):
        analysis = analyze_row(image_from_rows([[T, T, T]]), 0)
        assert analysis.trailing_transparent_count == 3
        assert analysis.distinct_opaque_color_count == 0
        assert dict(analysis.color_to_shift) == {}

    @pytest.mark.parametrize("row_index", [-1, 2])
    def test_row_index_out_of_range(self, image_from_rows, row_index):
        pattern = image_from_rows([[A], [B]])
        with pytest.raises(InvalidArgumentError):
            analyze_row(pattern, row_index)

    def test_table_is_read_only(self, image_from_rows):
        analysis = analyze_row(image_from_rows([[A, B]]), 0)
        with pytest.raises(TypeError):
            analysis.color_to_shift[B] = 5


class TestBestRow:
    """Tests for best_row()."""

    def test_first_opaque_row_wins(self, image_from_rows):
        pattern = image_from_rows([[A, T], [A, B], [C, D]])
        assert best_row(pattern).row_index == 1

    def test_opaque_pattern_picks_row_zero(self, image_from_rows):
        pattern = image_from_rows([[A, B], [C, D], [B, A]])
        analysis = best_row(pattern)
        assert analysis.row_index == 0
        assert analysis.trailing_transparent_count == 0

    def test_more_trailing_transparency_ranks_higher(self, image_from_rows):
        pattern = image_from_rows([[A, B, T], [A, T, T], [T, A, T]])
        analysis = best_row(pattern)
        assert analysis.row_index == 1
        assert analysis.trailing_transparent_count == 2

    def test_equal_transparency_keeps_first_row(self, image_from_rows):
        pattern = image_from_rows([[A, T], [B, T]])
        assert best_row(pattern).row_index == 0

    def test_pattern_without_rows(self):
        with pytest.raises(InvalidArgumentError):
            best_row(PixelImage([], 3, 0))


class TestBadCharacterPattern:
    """Tests for the derived scan quantities."""

    def test_defaults_to_best_row(self, image_from_rows):
        prepared = BadCharacterPattern(image_from_rows([[A, T], [B, C]]))
        assert prepared.line_index == 1
        assert not prepared.contains_transparent
        assert prepared.transparent_offset == 0

    def test_explicit_row(self, image_from_rows):
        prepared = BadCharacterPattern(image_from_rows([[A, T], [B, C]]), row_index=0)
        assert prepared.line_index == 0
        assert prepared.contains_transparent
        assert prepared.transparent_offset == 1
        assert prepared.anchor_column == 0

    def test_shifts_of_opaque_row(self, image_from_rows):
        prepared = BadCharacterPattern(image_from_rows([[A, B, A, C]]))

        assert prepared.anchor_column == 3
        assert prepared.shift_for(A) == 1
        assert prepared.shift_for(B) == 2
        assert prepared.shift_for(D) == 4
        # no earlier C, a matched anchor moves the full width
        assert prepared.repeat_shift == 4

    def test_repeat_shift_uses_previous_anchor_color(self, image_from_rows):
        prepared = BadCharacterPattern(image_from_rows([[A, B, A]]))
        assert prepared.repeat_shift == 2
        assert prepared.shift_for(B) == 1

    def test_wildcards_cap_shifts(self, image_from_rows):
        prepared = BadCharacterPattern(image_from_rows([[A, T, B, C]]))

        assert prepared.wildcard_limit == 2
        assert prepared.shift_for(D) == 2
        assert prepared.shift_for(A) == 2
        assert prepared.shift_for(B) == 1

    def test_trailing_transparency_moves_anchor(self, image_from_rows):
        prepared = BadCharacterPattern(image_from_rows([[A, B, T, T]]))

        assert prepared.anchor_column == 1
        assert prepared.anchor_color == B
        assert prepared.shift_for(A) == 1
        assert prepared.shift_for(D) == 2
        assert prepared.checks == [(0, A)]

    def test_transparent_anchor_row(self, image_from_rows):
        prepared = BadCharacterPattern(image_from_rows([[T, T], [A, T]]))
        assert prepared.line_index == 0
        assert not prepared.has_anchor
