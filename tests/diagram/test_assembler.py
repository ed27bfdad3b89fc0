"""Tests for diagram assembly and edge merging."""

from pmf.core.models import EdgeKind, GraphEdge, LayoutConfig, NodeKind
from pmf.diagram.assembler import assemble, assemble_view, merge_edges
from pmf.state.selection import (
    add_custom_edge,
    default_view_state,
    select_node,
    update_customizations,
    update_selection,
)
from tests.conftest import make_workflow


def _ids(edges):
    return [edge.id for edge in edges]


class TestMergeEdges:
    """Tests for the merge policy."""

    def test_custom_edges_follow_inferred(self):
        inferred = [GraphEdge.between("a", "s1")]
        custom = GraphEdge(id="custom-1", source="x", target="y")
        assert _ids(merge_edges(inferred, [custom])) == ["a-to-s1", "custom-1"]

    def test_inferred_edge_wins_on_id_collision(self):
        inferred = [GraphEdge.between("a", "s1", EdgeKind.STAGE_STATUS)]
        clash = GraphEdge(id="a-to-s1", source="other", target="elsewhere")
        merged = merge_edges(inferred, [clash])

        assert len(merged) == 1
        assert (merged[0].source, merged[0].target) == ("a", "s1")
        assert merged[0].kind == EdgeKind.STAGE_STATUS


class TestAssemble:
    """Tests for assemble()."""

    def test_custom_edge_survives_config_change(self, three_stage_workflow, layout_config):
        custom = GraphEdge(id="custom-1", source="a", target="c")
        first = assemble(three_stage_workflow, layout_config, True, [])
        wider = layout_config.model_copy(update={"container_width": 1200})
        second = assemble(three_stage_workflow, wider, True, [*first.edges, custom])

        assert "custom-1" in _ids(second.edges)
        assert _ids(second.edges)[: len(first.edges)] == _ids(first.edges)

    def test_recompute_with_own_edges_is_stable(self, three_stage_workflow, layout_config):
        first = assemble(three_stage_workflow, layout_config, False, [])
        second = assemble(three_stage_workflow, layout_config, True, first.edges)
        assert _ids(second.edges) == _ids(first.edges)

    def test_workflow_switch_drops_existing_edges(self, layout_config):
        other = make_workflow(["x", "y"], ["t1"], workflow_id="wf-2")
        custom = GraphEdge(id="custom-1", source="a", target="b")

        graph = assemble(other, layout_config, True, [custom], previous_workflow_id="wf-1")
        assert "custom-1" not in _ids(graph.edges)
        assert graph.workflow_id == "wf-2"

    def test_same_workflow_keeps_existing_edges(self, three_stage_workflow, layout_config):
        custom = GraphEdge(id="custom-1", source="a", target="c")
        graph = assemble(three_stage_workflow, layout_config, True, [custom], previous_workflow_id="wf-1")
        assert "custom-1" in _ids(graph.edges)

    def test_nodes_come_from_layout(self, three_stage_workflow, layout_config):
        graph = assemble(three_stage_workflow, layout_config, True)
        assert [node.x for node in graph.nodes_of_kind(NodeKind.STAGE)] == [30, 270, 510]
        assert len(graph.nodes_of_kind(NodeKind.ENTITY)) == 3

    def test_serializes_with_camel_case(self, three_stage_workflow, layout_config):
        payload = assemble(three_stage_workflow, layout_config, True).model_dump(mode="json", by_alias=True)
        assert payload["workflowId"] == "wf-1"
        stage = next(node for node in payload["nodes"] if node["kind"] == "stage")
        assert stage["parentId"] == "workflow-container"
        assert payload["edges"][0] == {"id": "a-to-s1", "source": "a", "target": "s1", "kind": "stage-status"}


class TestAssembleView:
    """Tests for assembly driven by a ViewState."""

    def test_expansion_flag_comes_from_customizations(self, three_stage_workflow):
        state = update_selection(default_view_state(), "workflow", "wf-1")
        collapsed = update_customizations(state, expand_all_entities=False)

        config = LayoutConfig()
        assert len(assemble_view(three_stage_workflow, config, state).nodes_of_kind(NodeKind.ENTITY)) == 3
        assert assemble_view(three_stage_workflow, config, collapsed).nodes_of_kind(NodeKind.ENTITY) == []

    def test_custom_edges_and_selection_are_applied(self, three_stage_workflow):
        state = update_selection(default_view_state(), "workflow", "wf-1")
        state = add_custom_edge(state, "a", "c")
        state = select_node(state, "b")
        state = update_customizations(state, show_legend=False)

        graph = assemble_view(three_stage_workflow, LayoutConfig(), state)
        assert "a-to-c" in _ids(graph.edges)
        assert graph.get_node("b").selected is True
        assert graph.get_node("a").selected is False
        assert graph.show_legend is False
        assert graph.show_mini_map is True

    def test_edges_from_another_workflow_are_not_rendered(self, three_stage_workflow):
        state = update_selection(default_view_state(), "workflow", "wf-other")
        state = add_custom_edge(state, "a", "c")

        graph = assemble_view(three_stage_workflow, LayoutConfig(), state)
        assert "a-to-c" not in _ids(graph.edges)
