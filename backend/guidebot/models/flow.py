# /guidebot/models/flow.py

from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


class NodeShape(str, Enum):
    """Outgoing-edge shape of a flow node."""
    TERMINAL = "terminal"
    BINARY = "binary"
    MULTI = "multi"


class FlowNode(BaseModel):
    """
    One question of a chatbot flow.

    Exactly one branch shape is meaningful per node: the binary A/B fields, the
    parallel multi-way lists, or neither (terminal).
    """
    id: int
    flow_id: int
    position: float = Field(..., description="Ordering key; fractional values sit between steps")
    question_text: str = ""
    information: Optional[str] = None
    option_a: Optional[str] = None
    option_b: Optional[str] = None
    next_id_a: Optional[int] = None
    next_id_b: Optional[int] = None
    options: Optional[List[str]] = None
    next_ids: Optional[List[int]] = None
    is_active: bool = True


class Flow(BaseModel):
    id: int
    name: str = ""
    category: Optional[str] = None
    terminal_destination: Optional[str] = Field(default=None, description="URL template of the final page")
    start_node_id: Optional[int] = None
    is_active: bool = True
    is_public: bool = False
    share_token: Optional[str] = None
    order: int = 0


class Edge(BaseModel):
    """An outgoing choice of a node: its label and where it leads."""
    label: str
    next_node_id: Optional[int] = None
    routes_to_terminal: bool = False
    synthesized: bool = False


class ResolvedNode(BaseModel):
    node_id: int
    flow_id: int
    position: float
    shape: NodeShape
    is_terminal: bool
    question_text: str
    information: str
    option_a: Optional[str] = None
    option_b: Optional[str] = None
    options: Optional[List[str]] = None
    next_id_a: Optional[int] = None
    next_id_b: Optional[int] = None
    next_ids: Optional[List[int]] = None
    edges: List[Edge] = Field(default_factory=list)
    terminal_destination: Optional[str] = None


class StartedFlow(BaseModel):
    flow_id: int
    node: ResolvedNode
    terminal_destination: Optional[str] = None
    product_info: Optional[Dict[str, Any]] = None
    user_name: str
