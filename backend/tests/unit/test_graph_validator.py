# backend/tests/unit/test_graph_validator.py
from guidebot.config import strings
from guidebot.models.flow import Flow, NodeShape
from guidebot.workflows.graph import build_edges, classify_node, needs_ask_family_option
from guidebot.workflows.validator import (
    validate_flow_graph,
    validate_node_references,
    validate_node_routes,
    validate_node_shape,
)


# --- Shape classification ---

def test_classify_node_shapes(node_factory):
    assert classify_node(node_factory(1, 1)) is NodeShape.TERMINAL
    assert classify_node(node_factory(1, 1, next_id_a=2)) is NodeShape.BINARY
    assert classify_node(node_factory(1, 1, next_id_b=3)) is NodeShape.BINARY
    assert classify_node(node_factory(1, 1, options=["a", "b"], next_ids=[2, 3])) is NodeShape.MULTI


def test_multi_way_wins_over_binary_fields(node_factory):
    node = node_factory(1, 1, next_id_a=2, options=["a"], next_ids=[3])
    assert classify_node(node) is NodeShape.MULTI


def test_empty_next_ids_is_not_multi(node_factory):
    assert classify_node(node_factory(1, 1, options=[], next_ids=[])) is NodeShape.TERMINAL


# --- Edges ---

def test_single_path_node_gets_ask_family_edge(node_factory, guide_flow):
    node = node_factory(1, 1, option_a="좋아요", next_id_a=2)

    edges = build_edges(node, guide_flow)

    assert [e.label for e in edges] == ["좋아요", strings.ASK_FAMILY_OPTION]
    assert edges[0].next_node_id == 2
    assert edges[1].routes_to_terminal and edges[1].synthesized
    assert edges[1].next_node_id is None


def test_no_ask_family_edge_without_terminal_destination(node_factory):
    node = node_factory(1, 1, option_a="좋아요", next_id_a=2)
    flow = Flow(id=1, terminal_destination=None)

    assert needs_ask_family_option(node, flow) is False
    assert len(build_edges(node, flow)) == 1


def test_explicit_empty_option_b_suppresses_ask_family(node_factory, guide_flow):
    node = node_factory(1, 1, option_a="좋아요", option_b="", next_id_a=2)

    edges = build_edges(node, guide_flow)

    assert not any(e.synthesized for e in edges)
    assert [e.label for e in edges] == ["좋아요", ""]


def test_binary_node_with_both_branches(node_factory, guide_flow):
    node = node_factory(1, 1, option_a="네", option_b="아니요", next_id_a=2, next_id_b=3)

    edges = build_edges(node, guide_flow, option_a="네!", option_b="아니요!")

    assert [(e.label, e.next_node_id) for e in edges] == [("네!", 2), ("아니요!", 3)]


def test_labelled_choice_without_target_routes_to_final_page(node_factory, guide_flow):
    node = node_factory(1, 1, option_a="예", option_b="아니요", next_id_a=2)

    edges = build_edges(node, guide_flow)

    assert [(e.label, e.next_node_id, e.routes_to_terminal) for e in edges] == [("예", 2, False), ("아니요", None, True)]
    assert not edges[1].synthesized


def test_a_choice_without_target_routes_to_final_page(node_factory, guide_flow):
    node = node_factory(1, 1, option_a="예", option_b="아니요", next_id_b=3)

    edges = build_edges(node, guide_flow)

    assert edges[0].routes_to_terminal and edges[0].next_node_id is None
    assert edges[1].next_node_id == 3 and not edges[1].routes_to_terminal


def test_choice_without_target_stays_unrouted_without_final_page(node_factory):
    node = node_factory(1, 1, option_a="예", option_b="아니요", next_id_a=2)
    flow = Flow(id=1, terminal_destination=None)

    edges = build_edges(node, flow)

    assert edges[1].next_node_id is None and not edges[1].routes_to_terminal


def test_multi_way_edges_pair_labels_with_targets(node_factory, guide_flow):
    node = node_factory(1, 1, options=["A", "B", "C"], next_ids=[4, 5])

    edges = build_edges(node, guide_flow)

    assert [(e.label, e.next_node_id) for e in edges] == [("A", 4), ("B", 5)]


def test_terminal_node_has_no_edges(node_factory, guide_flow):
    assert build_edges(node_factory(9, 22), guide_flow) == []


# --- Validation ---

def test_validate_node_shape_ambiguous(node_factory):
    result = validate_node_shape(node_factory(1, 1, next_id_a=2, options=["x"], next_ids=[3]))
    assert result["is_valid"] is False
    assert result["error_code"] == "AMBIGUOUS_BRANCH_SHAPE"


def test_validate_node_shape_mismatch(node_factory):
    result = validate_node_shape(node_factory(1, 1, options=["x", "y"], next_ids=[3]))
    assert result["error_code"] == "OPTION_TARGET_MISMATCH"


def test_validate_node_shape_ok(node_factory):
    assert validate_node_shape(node_factory(1, 1, next_id_a=2))["is_valid"] is True


def test_validate_node_references(node_factory):
    node = node_factory(1, 1, next_id_a=2, next_id_b=7)

    assert validate_node_references(node, [1, 2, 7])["is_valid"] is True
    result = validate_node_references(node, [1, 2])
    assert result["error_code"] == "DANGLING_REFERENCE"
    assert "7" in result["message"]


def test_validate_flow_graph_collects_problems(node_factory):
    flow = Flow(id=5, terminal_destination="/offer", start_node_id=100)
    nodes = [
        node_factory(1, 1, flow_id=5, next_id_a=2),
        node_factory(2, 2, flow_id=5, options=["a", "b"], next_ids=[3]),
    ]

    report = validate_flow_graph(flow, nodes)

    assert report["is_valid"] is False
    assert report["node_count"] == 2
    codes = [issue["error_code"] for issue in report["errors"]]
    assert codes == ["MISSING_START_NODE", "OPTION_TARGET_MISMATCH", "DANGLING_REFERENCE"]


def test_validate_flow_graph_clean(node_factory, guide_flow):
    nodes = [node_factory(1, 1, next_id_a=2), node_factory(2, 2)]

    report = validate_flow_graph(guide_flow, nodes)

    assert report == {"flow_id": 1, "is_valid": True, "node_count": 2, "errors": []}


def test_validate_node_routes(node_factory, guide_flow):
    node = node_factory(1, 1, option_a="예", option_b="아니요", next_id_a=2)

    assert validate_node_routes(node, guide_flow)["is_valid"] is True
    result = validate_node_routes(node, Flow(id=1, terminal_destination=None))
    assert result["error_code"] == "UNROUTED_CHOICE"
    assert "'아니요'" in result["message"]


def test_validate_flow_graph_reports_unrouted_choice(node_factory):
    flow = Flow(id=3, terminal_destination=None, start_node_id=1)
    nodes = [
        node_factory(1, 1, flow_id=3, option_a="예", option_b="아니요", next_id_a=2),
        node_factory(2, 2, flow_id=3),
    ]

    report = validate_flow_graph(flow, nodes)

    assert report["is_valid"] is False
    assert [(i["node_id"], i["error_code"]) for i in report["errors"]] == [(1, "UNROUTED_CHOICE")]
