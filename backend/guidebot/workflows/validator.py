# /guidebot/workflows/validator.py

"""
Pure validation functions for chatbot flow graphs.

Checks that each node uses one branch shape consistently, that multi-way
labels line up with their targets, that every referenced node exists in
the flow and that every choice leads to a node or to the final page.

All functions are:
- Pure (no side effects)
- Deterministic (same input = same output)
- No database access
- No logging
"""

from typing import Dict, Iterable, List, Optional, TypedDict

from guidebot.models.flow import Flow, FlowNode
from guidebot.workflows.graph import build_edges


class ValidationResult(TypedDict):
    """Result of a validation check."""
    is_valid: bool
    error_code: Optional[str]
    message: Optional[str]


class NodeIssue(TypedDict):
    node_id: Optional[int]
    error_code: str
    message: str


class FlowReport(TypedDict):
    flow_id: int
    is_valid: bool
    node_count: int
    errors: List[NodeIssue]


_VALID: ValidationResult = {"is_valid": True, "error_code": None, "message": None}


def validate_node_shape(node: FlowNode) -> ValidationResult:
    """
    A node may carry binary fields or multi-way lists, not both; multi-way
    labels and targets must have the same length.

    Args:
        node: The node to check

    Returns:
        ValidationResult with is_valid=False on the first problem found
    """
    has_multi = bool(node.next_ids) or bool(node.options)
    has_binary = node.next_id_a is not None or node.next_id_b is not None

    if has_multi and has_binary:
        return {
            "is_valid": False,
            "error_code": "AMBIGUOUS_BRANCH_SHAPE",
            "message": f"Node {node.id} defines both A/B targets and multi-way options",
        }

    if has_multi:
        labels = node.options or []
        targets = node.next_ids or []
        if len(labels) != len(targets):
            return {
                "is_valid": False,
                "error_code": "OPTION_TARGET_MISMATCH",
                "message": f"Node {node.id} has {len(labels)} options but {len(targets)} targets",
            }

    return dict(_VALID)


def validate_node_references(node: FlowNode, known_ids: Iterable[int]) -> ValidationResult:
    """
    Every target a node points at must be a node of the same flow.

    Args:
        node: The node to check
        known_ids: Ids of all nodes in the flow

    Returns:
        ValidationResult listing the dangling targets when invalid
    """
    known = set(known_ids)
    targets = [node.next_id_a, node.next_id_b] + list(node.next_ids or [])
    dangling = [t for t in targets if t is not None and t not in known]

    if dangling:
        return {
            "is_valid": False,
            "error_code": "DANGLING_REFERENCE",
            "message": f"Node {node.id} points at missing nodes: {', '.join(str(t) for t in dangling)}",
        }
    return dict(_VALID)


def validate_node_routes(node: FlowNode, flow: Flow) -> ValidationResult:
    """
    Every choice a node offers must lead somewhere: to another node or to the
    flow's final page.

    Args:
        node: The node to check
        flow: The flow the node belongs to

    Returns:
        ValidationResult naming the choices that lead nowhere when invalid
    """
    unrouted = [e.label for e in build_edges(node, flow) if e.next_node_id is None and not e.routes_to_terminal]

    if unrouted:
        return {
            "is_valid": False,
            "error_code": "UNROUTED_CHOICE",
            "message": f"Node {node.id} has choices with no target and no final page: {', '.join(repr(label) for label in unrouted)}",
        }
    return dict(_VALID)


def validate_flow_graph(flow: Flow, nodes: List[FlowNode]) -> FlowReport:
    """Run every node check over a flow and collect the issues."""
    issues: List[NodeIssue] = []
    by_id: Dict[int, FlowNode] = {n.id: n for n in nodes}

    if flow.start_node_id is not None and flow.start_node_id not in by_id:
        issues.append({
            "node_id": flow.start_node_id,
            "error_code": "MISSING_START_NODE",
            "message": f"Flow {flow.id} starts at node {flow.start_node_id}, which does not exist",
        })

    for node in sorted(nodes, key=lambda n: (n.position, n.id)):
        checks = (
            validate_node_shape(node),
            validate_node_references(node, by_id),
            validate_node_routes(node, flow),
        )
        for result in checks:
            if not result["is_valid"]:
                issues.append({
                    "node_id": node.id,
                    "error_code": result["error_code"],
                    "message": result["message"],
                })

    return {
        "flow_id": flow.id,
        "is_valid": not issues,
        "node_count": len(nodes),
        "errors": issues,
    }
