"""Tests for static node and edge presentation attributes."""

from cfg_viewer.config.settings import DisplaySettings
from cfg_viewer.core.models import EdgeKind, GraphEdge, GraphNode, NodeRole
from cfg_viewer.layout.snapshot import PositionsSnapshot
from cfg_viewer.render import EdgeAttributes, NodeAttributes, RecordingSurface, RenderSurface


class TestNodeAttributes:
    def test_short_detail_node(self):
        attrs = NodeAttributes.from_node(GraphNode(1, "b1", NodeRole.DETAIL))

        assert attrs.short_text == "b1"
        assert not attrs.expandable
        assert (attrs.width, attrs.height) == (80, 35)
        assert attrs.badge is None

    def test_long_detail_node_is_expandable(self):
        attrs = NodeAttributes.from_node(GraphNode(1, "abcdefghijk", NodeRole.DETAIL))

        assert attrs.expandable
        assert attrs.short_text == "abcdefghij..."
        assert attrs.width == 88

    def test_main_node_limit(self):
        fits = NodeAttributes.from_node(GraphNode(0, "x" * 14, NodeRole.MAIN))
        spills = NodeAttributes.from_node(GraphNode(0, "x" * 15, NodeRole.MAIN))

        assert not fits.expandable
        assert spills.expandable
        assert (fits.width, fits.height) == (120, 50)

    def test_badges(self):
        start = NodeAttributes.from_node(GraphNode(0, "a", NodeRole.START))
        end = NodeAttributes.from_node(GraphNode(1, "b", NodeRole.END))

        assert start.badge == "START"
        assert end.badge == "END"

    def test_custom_limits(self):
        attrs = NodeAttributes.from_node(
            GraphNode(0, "abcdef", NodeRole.MAIN), DisplaySettings(main_text_limit=3)
        )

        assert attrs.short_text == "abc..."


class TestEdgeAttributes:
    def test_conditional_labels(self):
        true_edge = EdgeAttributes.from_edge(GraphEdge(0, 0, 1, EdgeKind.TRUE))
        false_edge = EdgeAttributes.from_edge(GraphEdge(1, 0, 2, EdgeKind.FALSE))
        seq_edge = EdgeAttributes.from_edge(GraphEdge(2, 1, 2, EdgeKind.SEQUENTIAL))

        assert (true_edge.label, false_edge.label, seq_edge.label) == ("T", "F", None)
        assert not true_edge.dashed

    def test_detail_edges_are_dashed(self):
        attrs = EdgeAttributes.from_edge(GraphEdge(5, 0, 1, EdgeKind.DETAIL))

        assert attrs.dashed
        assert attrs.label is None


class TestRecordingSurface:
    def test_implements_protocol(self):
        assert isinstance(RecordingSurface(), RenderSurface)

    def test_draw_resets_snapshots(self):
        surface = RecordingSurface()
        surface.snapshots.append(object())

        surface.draw_graph([], [])

        assert len(surface.snapshots) == 0
        assert surface.draw_count == 1
        assert surface.last_snapshot is None

    def test_snapshot_history_is_bounded(self, session, two_node_payload):
        session.load(two_node_payload)

        session.run_layout(500)

        snapshots = session.surface.snapshots
        assert len(snapshots) == 100
        assert snapshots[-1].tick == 500
        assert snapshots[0].tick == 401

    def test_custom_history(self):
        surface = RecordingSurface(history=2)
        for tick in range(5):
            surface.update_positions(PositionsSnapshot(tick=tick, alpha=1.0))

        assert [s.tick for s in surface.snapshots] == [3, 4]
        assert surface.last_snapshot.tick == 4

    def test_mark_only_drawn_nodes(self):
        surface = RecordingSurface()
        surface.draw_graph(
            [NodeAttributes.from_node(GraphNode(0, "a", NodeRole.START))], []
        )

        surface.mark_selected(7)
        assert surface.marked_node is None

        surface.mark_selected(0)
        assert surface.marked_node == 0
