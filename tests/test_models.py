"""Tests for the Tissue and TissueBox models."""

from __future__ import annotations

from tissuebox.models import Tissue, TissueBox


class TestTissue:
    def test_to_string_without_tags(self, make_tissue):
        tissue = make_tissue("Fix build", ["CI is red", "Since Tuesday"])
        assert tissue.to_string() == "Fix build\n  - CI is red\n  - Since Tuesday\n"

    def test_to_string_sorts_tags(self, make_tissue):
        tissue = make_tissue("Fix build", tags={"urgent", "ci"})
        assert tissue.to_string() == "Fix build (ci, urgent)\n"

    def test_describe_and_tag(self):
        tissue = Tissue("Foo")
        tissue.describe("one")
        tissue.describe("two")
        tissue.tag("bug")
        tissue.tag("bug")
        assert tissue.description == ["one", "two"]
        assert tissue.tags == {"bug"}


class TestTissueBoxRemoveRestore:
    def test_remove_moves_to_recycle_bin_tail(self, sample_box):
        removed = sample_box.remove(0)
        assert removed is not None and removed.title == "Foo"
        assert [t.title for t in sample_box.tissues] == ["Bar"]
        assert [t.title for t in sample_box.recycle_bin] == ["Foo"]

        sample_box.remove(0)
        assert [t.title for t in sample_box.recycle_bin] == ["Foo", "Bar"]

    def test_restore_appends_to_tissues(self, sample_box):
        sample_box.remove(0)
        restored = sample_box.restore(0)
        assert restored is not None
        assert [t.title for t in sample_box.tissues] == ["Bar", "Foo"]
        assert sample_box.recycle_bin == []

    def test_restore_keeps_full_item(self, sample_box):
        sample_box.remove(0)
        sample_box.restore(0)
        foo = sample_box.tissues[-1]
        assert foo.description == ["Crashes on empty input"]
        assert foo.tags == {"bug"}

    def test_bad_indices_return_none(self, sample_box):
        assert sample_box.remove(5) is None
        assert sample_box.remove(-1) is None
        assert sample_box.restore(0) is None
        assert len(sample_box.tissues) == 2


class TestStar:
    def test_star_then_unstar(self, sample_box):
        assert sample_box.toggle_star(1) is None
        assert sample_box.starred == 1
        assert sample_box.toggle_star(1) is None
        assert sample_box.starred is None

    def test_star_elsewhere_returns_jump_target(self, sample_box):
        sample_box.toggle_star(1)
        assert sample_box.toggle_star(0) == 1
        assert sample_box.starred == 1

    def test_removing_starred_clears_star(self, sample_box):
        sample_box.starred = 0
        sample_box.remove(0)
        assert sample_box.starred is None

    def test_removing_earlier_item_shifts_star(self, sample_box):
        sample_box.create("Baz")
        sample_box.starred = 2
        sample_box.remove(0)
        assert sample_box.starred == 1
        assert sample_box.tissues[sample_box.starred].title == "Baz"

    def test_removing_later_item_keeps_star(self, sample_box):
        sample_box.starred = 0
        sample_box.remove(1)
        assert sample_box.starred == 0

    def test_out_of_range_star_is_dropped(self):
        box = TissueBox(tissues=[Tissue("Only")], starred=3)
        assert box.starred is None


def test_box_to_string_numbers_tissues(sample_box):
    assert sample_box.to_string() == (
        "0. Foo (bug)\n"
        "  - Crashes on empty input\n"
        "1. Bar (good first issue, help wanted)\n"
        "  - Add a flag\n"
        "  - Document the flag\n"
    )


def test_empty_box_to_string():
    assert TissueBox().to_string() == ""
