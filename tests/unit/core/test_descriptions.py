"""Tests for the node description index."""

from cfg_viewer.core.descriptions import DescriptionIndex
from cfg_viewer.core.models import DescriptionEntry


def _entry(node_id, expressions=None, description=True):
    payload = {"nodeId": node_id}
    if description:
        payload["description"] = {"expressions": expressions}
    return DescriptionEntry.model_validate(payload)


class TestDescriptionIndex:
    def test_lookup(self):
        index = DescriptionIndex.from_entries([_entry(0, ["a"]), _entry(4, ["b"])])

        assert index.get(0).expressions == ["a"]
        assert index.get(4).expressions == ["b"]
        assert index.get(7) is None
        assert len(index) == 2

    def test_last_entry_wins(self):
        index = DescriptionIndex.from_entries([_entry(0, ["first"]), _entry(0, ["second"])])

        assert index.get(0).expressions == ["second"]
        assert len(index) == 1

    def test_missing_entries(self):
        index = DescriptionIndex.from_entries(None)

        assert len(index) == 0
        assert list(index) == []

    def test_entry_without_description_is_not_contained(self):
        index = DescriptionIndex.from_entries([_entry(3, description=False)])

        assert 3 not in index
        assert index.get(3) is None

    def test_populate_replaces_previous_contents(self):
        index = DescriptionIndex.from_entries([_entry(0, ["a"])])
        index.populate([_entry(1, ["b"])])

        assert 0 not in index
        assert 1 in index
        assert list(index) == [1]
