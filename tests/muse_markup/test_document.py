"""Tests for the document model and its list-end annotations."""

from src.muse_markup.document import Document


class TestListEndAnnotations:
    """Test list-end annotation bookkeeping."""

    def test_unannotated_document(self):
        document = Document("abcdefghij")

        assert document.list_ends == []
        assert document.is_list_end(0) is False
        assert document.next_list_end_change(0) is None

    def test_overlapping_ranges_merge(self):
        document = Document("abcdefghij")
        document.mark_list_end(2, 4)
        document.mark_list_end(3, 6)
        document.mark_list_end(8)

        assert document.list_ends == [(2, 6), (8, 9)]

    def test_marks_in_any_order(self):
        document = Document("x" * 30)
        for start, end in [(20, 22), (2, 4), (10, 12), (6, 8), (4, 5), (11, 21)]:
            document.mark_list_end(start, end)

        assert document.list_ends == [(2, 5), (6, 8), (10, 22)]
        assert document.next_list_end_change(0) == 2
        assert document.next_list_end_change(5) == 6
        assert document.next_list_end_change(8) == 10
        assert document.next_list_end_change(15) == 22
        assert document.next_list_end_change(22) is None

    def test_is_list_end(self):
        document = Document("abcdefghij")
        document.mark_list_end(2, 6)
        document.mark_list_end(8)

        assert [document.is_list_end(pos) for pos in range(10)] == [
            False, False, True, True, True, True, False, False, True, False,
        ]

    def test_next_list_end_change(self):
        document = Document("abcdefghij")
        document.mark_list_end(2, 6)
        document.mark_list_end(8)

        assert document.next_list_end_change(0) == 2
        assert document.next_list_end_change(2) == 6
        assert document.next_list_end_change(4) == 6
        assert document.next_list_end_change(6) == 8
        assert document.next_list_end_change(8) == 9
        assert document.next_list_end_change(9) is None

    def test_range_reaching_document_end_has_no_change(self):
        document = Document("abcdefghij")
        document.mark_list_end(8)
        document.mark_list_end(9)

        assert document.list_ends == [(8, 10)]
        assert document.next_list_end_change(8) is None

    def test_marks_are_clipped_to_document(self):
        document = Document("abc")
        document.mark_list_end(3)
        document.mark_list_end(-2, 1)

        assert document.list_ends == [(0, 1)]

    def test_clear_list_ends(self):
        document = Document("abc")
        document.mark_list_end(1)
        document.clear_list_ends()

        assert document.list_ends == []


class TestLineHelpers:
    """Test line navigation helpers."""

    def test_forward_line(self):
        document = Document("one\ntwo\nthree")

        assert document.forward_line(0) == 4
        assert document.forward_line(3) == 4
        assert document.forward_line(4) == 8
        assert document.forward_line(9) == len(document)

    def test_line_at(self):
        document = Document("one\ntwo\nthree")

        assert document.line_at(0) == "one"
        assert document.line_at(5) == "two"
        assert document.line_at(12) == "three"
        assert document.line_bounds(5) == (4, 7)

    def test_line_number(self):
        document = Document("one\ntwo\nthree")

        assert document.line_number(0) == 1
        assert document.line_number(4) == 2
        assert document.line_number(10) == 3
