# /guidebot/workflows/engine.py

"""
Node rendering engine.

Turns a stored FlowNode into a ResolvedNode: interpolates the question,
information and option labels, applies content augmentation, builds the
outgoing edges and composes the terminal destination.

No database access happens here; the asset source passed in is the only
I/O capability the engine touches.
"""

from typing import Mapping, Optional

from guidebot.models.context import ContextBundle
from guidebot.models.flow import Flow, FlowNode, NodeShape, ResolvedNode
from guidebot.workflows.augmentation import AssetSource, augment
from guidebot.workflows.graph import build_edges, classify_node
from guidebot.workflows.interpolator import build_tokens, render, render_all
from guidebot.workflows.terminal import compose_terminal


async def render_node(
    node: FlowNode,
    flow: Optional[Flow],
    context: ContextBundle,
    assets: AssetSource,
    tracking_ref: Optional[str] = None,
    labels: Optional[Mapping[str, str]] = None,
    terminal_override: Optional[str] = None,
) -> ResolvedNode:
    """
    Render one node for a client.

    Args:
        node: Stored node
        flow: Owning flow (its terminal destination feeds the edges and the URL)
        context: Rendering context for this call
        assets: Media and testimonial lookups used by augmentation
        tracking_ref: Partner reference carried onto the terminal URL
        labels: Fallback words overriding the interpolator defaults
        terminal_override: Destination used instead of the flow's own

    Returns:
        The fully rendered node
    """
    tokens = build_tokens(context, labels)
    shape = classify_node(node)

    question_text = render(node.question_text, tokens)
    information = render(node.information, tokens)
    information = await augment(node, information, context, assets)

    option_a = render(node.option_a, tokens) if node.option_a is not None else None
    option_b = render(node.option_b, tokens) if node.option_b is not None else None
    options = render_all(node.options, tokens) if node.options is not None else None

    edges = build_edges(node, flow, option_a=option_a, option_b=option_b, options=options)
    # Clients that only read the A/B fields still see the synthesized choice.
    for edge in edges:
        if edge.synthesized:
            option_b = edge.label

    base = terminal_override or (flow.terminal_destination if flow else None)

    return ResolvedNode(
        node_id=node.id,
        flow_id=node.flow_id,
        position=node.position,
        shape=shape,
        is_terminal=shape is NodeShape.TERMINAL,
        question_text=question_text,
        information=information,
        option_a=option_a,
        option_b=option_b,
        options=options,
        next_id_a=node.next_id_a,
        next_id_b=node.next_id_b,
        next_ids=node.next_ids,
        edges=edges,
        terminal_destination=compose_terminal(base, tracking_ref),
    )
