"""Tests for graph construction and role classification."""

from __future__ import annotations

import pytest

from cfg_viewer.core.exceptions import ValidationError
from cfg_viewer.core.graph_builder import build_graph, classify_roles
from cfg_viewer.core.models import EdgeKind, NodeRole, RawEdge

# ---------------------------------------------------------------------------
# Worked examples
# ---------------------------------------------------------------------------


class TestWorkedExamples:
    def test_single_edge_gives_start_and_end(self, two_node_payload):
        graph = build_graph(two_node_payload)

        assert graph.nodes[0].role is NodeRole.START
        assert graph.nodes[1].role is NodeRole.END
        assert len(graph.flow_edges) == 1
        assert graph.detail_edges == ()

    def test_no_edges_makes_every_node_detail(self):
        graph = build_graph(
            {
                "nodes": [
                    {"id": 0, "subNodes": [1], "text": "x=1"},
                    {"id": 1, "text": "1"},
                ],
                "edges": [],
            }
        )

        assert graph.nodes[0].role is NodeRole.DETAIL
        assert graph.nodes[1].role is NodeRole.DETAIL
        assert len(graph.detail_edges) == 1
        edge = graph.detail_edges[0]
        assert (edge.source, edge.target, edge.kind) == (0, 1, EdgeKind.DETAIL)

    def test_edge_from_unknown_node_names_the_id(self):
        with pytest.raises(ValidationError) as exc_info:
            build_graph(
                {
                    "nodes": [{"id": 0, "text": "a"}, {"id": 1, "text": "b"}],
                    "edges": [{"sourceId": 5, "destId": 1}],
                }
            )

        assert exc_info.value.node_id == 5
        assert "5" in str(exc_info.value)
        assert exc_info.value.field == "edges[0].sourceId"


# ---------------------------------------------------------------------------
# Role classification
# ---------------------------------------------------------------------------


class TestClassifyRoles:
    def test_sequential_sample_roles(self, sequential_payload):
        graph = build_graph(sequential_payload)

        assert graph.nodes[0].role is NodeRole.START
        assert graph.nodes[4].role is NodeRole.MAIN
        assert graph.nodes[8].role is NodeRole.END
        for detail_id in (1, 2, 3, 5, 6, 7):
            assert graph.nodes[detail_id].role is NodeRole.DETAIL

    def test_conditional_sample_roles(self, conditional_payload):
        graph = build_graph(conditional_payload)

        assert graph.nodes[0].role is NodeRole.START
        assert graph.nodes[8].role is NodeRole.END
        assert {graph.nodes[i].role for i in (3, 4, 5, 6, 7)} == {NodeRole.MAIN}
        assert graph.nodes[1].role is NodeRole.DETAIL
        assert graph.nodes[2].role is NodeRole.DETAIL

    def test_every_node_gets_exactly_one_role(self, conditional_payload):
        graph = build_graph(conditional_payload)
        roles = graph.roles()

        assert set(roles) == set(graph.nodes)
        assert all(isinstance(role, NodeRole) for role in roles.values())

    def test_self_loop_counts_as_incoming_and_outgoing(self):
        graph = build_graph(
            {
                "nodes": [{"id": 0, "text": "loop"}, {"id": 1, "text": "exit"}],
                "edges": [
                    {"sourceId": 0, "destId": 0},
                    {"sourceId": 0, "destId": 1},
                ],
            }
        )

        assert graph.nodes[0].role is NodeRole.MAIN
        assert graph.nodes[1].role is NodeRole.END

    def test_detail_role_ignores_sub_nodes(self):
        """A node outside the connected set is Detail even if it owns sub nodes."""
        roles = classify_roles([0, 1, 2], [RawEdge(sourceId=1, destId=2)])

        assert roles[0] is NodeRole.DETAIL
        assert roles[1] is NodeRole.START
        assert roles[2] is NodeRole.END

    def test_cycle_nodes_are_main(self):
        roles = classify_roles(
            [0, 1], [RawEdge(sourceId=0, destId=1), RawEdge(sourceId=1, destId=0)]
        )

        assert roles == {0: NodeRole.MAIN, 1: NodeRole.MAIN}

    def test_rebuilding_yields_identical_roles(self, sequential_payload):
        first = build_graph(sequential_payload)
        second = build_graph(sequential_payload)

        assert first is not second
        assert first.roles() == second.roles()


# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------


class TestEdges:
    def test_detail_edge_count_matches_sub_node_entries(self, sequential_payload):
        graph = build_graph(sequential_payload)
        total_sub_nodes = sum(
            len(node.get("subNodes", [])) for node in sequential_payload["nodes"]
        )

        assert len(graph.detail_edges) == total_sub_nodes == 6

    def test_duplicate_sub_nodes_are_kept(self):
        graph = build_graph(
            {
                "nodes": [{"id": 0, "text": "f(x, x)", "subNodes": [1, 1]}, {"id": 1, "text": "x"}],
                "edges": [],
            }
        )

        assert [(e.source, e.target) for e in graph.detail_edges] == [(0, 1), (0, 1)]

    def test_detail_edges_follow_declaration_order(self, sequential_payload):
        graph = build_graph(sequential_payload)

        assert [(e.source, e.target) for e in graph.detail_edges] == [
            (0, 1),
            (0, 2),
            (2, 3),
            (4, 5),
            (4, 6),
            (6, 7),
        ]

    def test_parallel_flow_edges_are_kept(self, conditional_payload):
        graph = build_graph(conditional_payload)
        to_end = [e.kind for e in graph.flow_edges if (e.source, e.target) == (7, 8)]

        assert sorted(to_end) == sorted([EdgeKind.TRUE, EdgeKind.FALSE])
        assert len(graph.flow_edges) == 9

    def test_edge_ids_are_unique_and_ordered(self, conditional_payload):
        graph = build_graph(conditional_payload)

        assert [e.id for e in graph.edges] == list(range(len(graph.edges)))
        assert all(not e.is_detail for e in graph.edges[:9])

    def test_missing_kind_defaults_to_sequential(self, two_node_payload):
        graph = build_graph(two_node_payload)

        assert graph.flow_edges[0].kind is EdgeKind.SEQUENTIAL


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.parametrize("missing", ["nodes", "edges"])
    def test_missing_collection_is_named(self, two_node_payload, missing):
        del two_node_payload[missing]

        with pytest.raises(ValidationError) as exc_info:
            build_graph(two_node_payload)

        assert exc_info.value.field == missing
        assert missing in str(exc_info.value)

    def test_collection_must_be_a_list(self, two_node_payload):
        two_node_payload["edges"] = {"sourceId": 0, "destId": 1}

        with pytest.raises(ValidationError) as exc_info:
            build_graph(two_node_payload)

        assert exc_info.value.field == "edges"

    def test_malformed_node_id_is_named(self):
        with pytest.raises(ValidationError) as exc_info:
            build_graph({"nodes": [{"id": "zero", "text": "a"}], "edges": []})

        assert exc_info.value.field == "nodes[0].id"

    def test_declared_detail_kind_is_rejected(self, two_node_payload):
        two_node_payload["edges"][0]["kind"] = "detail"

        with pytest.raises(ValidationError) as exc_info:
            build_graph(two_node_payload)

        assert exc_info.value.field == "edges[0].kind"

    def test_unknown_kind_is_rejected(self, two_node_payload):
        two_node_payload["edges"][0]["kind"] = "JumpEdge"

        with pytest.raises(ValidationError):
            build_graph(two_node_payload)

    def test_duplicate_node_id(self):
        with pytest.raises(ValidationError) as exc_info:
            build_graph(
                {"nodes": [{"id": 3, "text": "a"}, {"id": 3, "text": "b"}], "edges": []}
            )

        assert exc_info.value.node_id == 3
        assert exc_info.value.field == "nodes[1].id"

    def test_unknown_destination(self, two_node_payload):
        two_node_payload["edges"].append({"sourceId": 1, "destId": 42})

        with pytest.raises(ValidationError) as exc_info:
            build_graph(two_node_payload)

        assert exc_info.value.node_id == 42
        assert exc_info.value.field == "edges[1].destId"

    def test_unknown_sub_node(self, two_node_payload):
        two_node_payload["nodes"][0]["subNodes"] = [1, 9]

        with pytest.raises(ValidationError) as exc_info:
            build_graph(two_node_payload)

        assert exc_info.value.node_id == 9
        assert exc_info.value.field == "nodes[0].subNodes[1]"


# ---------------------------------------------------------------------------
# Descriptions and visibility
# ---------------------------------------------------------------------------


class TestDescriptionsAndVisibility:
    def test_descriptions_attached_to_nodes(self, sequential_payload):
        graph = build_graph(sequential_payload)

        assert graph.nodes[0].description is not None
        assert graph.nodes[0].description.expressions == ["b1"]
        assert graph.nodes[1].description is None

    def test_extra_description_keys_are_preserved(self, sequential_payload):
        graph = build_graph(sequential_payload)

        extra = graph.nodes[0].description.model_extra
        assert extra["info"] == {"clinit": "_|_"}

    def test_non_mapping_state_section_is_kept(self, two_node_payload):
        two_node_payload["descriptions"] = [
            {"nodeId": 0, "description": {"state": {"heap": ["x"], "value": "top"}}}
        ]

        graph = build_graph(two_node_payload)

        state = graph.nodes[0].description.state
        assert state.heap == ["x"]
        assert state.value == "top"

    def test_visible_without_details(self, sequential_payload):
        graph = build_graph(sequential_payload)
        visible = graph.visible(show_details=False)

        assert visible.node_ids == {0, 4, 8}
        assert len(visible.edges) == 2
        assert all(not e.is_detail for e in visible.edges)

    def test_visible_with_details(self, sequential_payload):
        graph = build_graph(sequential_payload)
        visible = graph.visible(show_details=True)

        assert visible.node_ids == set(range(9))
        assert len(visible.edges) == 8

    def test_name_is_carried(self, sequential_payload):
        graph = build_graph(sequential_payload)

        assert graph.name == "void Main::main(String*[] args)"
