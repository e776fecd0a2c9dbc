# /guidebot/workflows/graph.py

"""
Node shape classification and outgoing-edge construction.

Pure functions: no database access and no logging.
"""

from typing import List, Optional

from guidebot.config import strings
from guidebot.models.flow import Edge, Flow, FlowNode, NodeShape


def classify_node(node: FlowNode) -> NodeShape:
    """
    Decide which branch shape a node uses.

    Multi-way wins whenever next_ids is non-empty; otherwise the node is binary
    if either A/B target is set, and terminal when it has no targets at all.
    """
    if node.next_ids:
        return NodeShape.MULTI
    if node.next_id_a is not None or node.next_id_b is not None:
        return NodeShape.BINARY
    return NodeShape.TERMINAL


def needs_ask_family_option(node: FlowNode, flow: Optional[Flow]) -> bool:
    """
    True when a binary node has only its A branch and the flow has a final page
    to send the undecided visitor to.
    """
    return (
        classify_node(node) is NodeShape.BINARY
        and node.option_b is None
        and node.next_id_b is None
        and node.next_id_a is not None
        and flow is not None
        and bool(flow.terminal_destination)
    )


def _edge(label: str, target: Optional[int], flow: Optional[Flow]) -> Edge:
    """A choice without a target leads to the flow's final page, when there is one."""
    if target is None and flow is not None and flow.terminal_destination:
        return Edge(label=label, routes_to_terminal=True)
    return Edge(label=label, next_node_id=target)


def build_edges(
    node: FlowNode,
    flow: Optional[Flow],
    option_a: Optional[str] = None,
    option_b: Optional[str] = None,
    options: Optional[List[str]] = None,
) -> List[Edge]:
    """
    Outgoing edges of a node, using already rendered labels when given.

    Multi-way labels are paired with targets position by position; any surplus
    on either side is dropped here and reported by the flow validator instead.
    """
    shape = classify_node(node)

    if shape is NodeShape.MULTI:
        labels = options if options is not None else (node.options or [])
        return [Edge(label=label, next_node_id=target) for label, target in zip(labels, node.next_ids or [])]

    if shape is NodeShape.TERMINAL:
        return []

    label_a = option_a if option_a is not None else node.option_a
    label_b = option_b if option_b is not None else node.option_b

    edges: List[Edge] = []
    if label_a is not None or node.next_id_a is not None:
        edges.append(_edge(label_a or "", node.next_id_a, flow))

    if needs_ask_family_option(node, flow):
        edges.append(Edge(label=strings.ASK_FAMILY_OPTION, routes_to_terminal=True, synthesized=True))
    elif label_b is not None or node.next_id_b is not None:
        edges.append(_edge(label_b or "", node.next_id_b, flow))

    return edges
