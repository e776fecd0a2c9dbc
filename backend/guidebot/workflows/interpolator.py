# /guidebot/workflows/interpolator.py

"""
Template interpolation for flow node text.

Templates carry `{token}` placeholders. Rendering is fail-soft: a token that is
not present in the token mapping is left verbatim, so a partially populated
context still produces readable output.

The set of tokens is an enumerated table (TOKEN_TABLE). Adding a token means
adding a row, not another replace call.

All functions here are pure: no I/O and no logging.
"""

import re
from datetime import datetime
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from guidebot.config import strings
from guidebot.config.media import DESTINATION_VOCABULARY
from guidebot.models.context import ContextBundle

TOKEN_RE = re.compile(r"\{([^{}\s]+)\}")

# Fallback words, overridable through the string service.
DEFAULT_LABELS: Dict[str, str] = {
    "PRICE_ON_REQUEST": strings.PRICE_ON_REQUEST,
    "SCHEDULE_ON_REQUEST": strings.SCHEDULE_ON_REQUEST,
    "DESTINATION_FALLBACK": strings.DESTINATION_FALLBACK,
}


def render(template: Optional[str], tokens: Mapping[str, str]) -> str:
    """
    Substitute every `{name}` in the template with tokens[name].

    Args:
        template: Template text; None renders as an empty string
        tokens: Token name → replacement text

    Returns:
        The rendered string. Unknown tokens are kept as-is.
    """
    if template is None:
        return ""
    if not isinstance(template, str):
        template = str(template)

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in tokens:
            value = tokens[name]
            return "" if value is None else str(value)
        return match.group(0)

    return TOKEN_RE.sub(_substitute, template)


# ==================== Formatting helpers ====================

def format_price(value: Optional[float], fallback: str) -> str:
    """Thousands-separated price, e.g. 1290000 → '1,290,000'."""
    if value is None or value == 0:
        return fallback
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}".rstrip("0").rstrip(".")


def format_date(value: Optional[datetime], fallback: str) -> str:
    """Korean short date, e.g. 2025-03-15 → '2025. 3. 15.'."""
    if value is None:
        return fallback
    return f"{value.year}. {value.month}. {value.day}."


def extract_destinations(package_name: Optional[str], itinerary: Optional[str] = None) -> List[str]:
    """
    Recognised place names in scan order, deduplicated.

    The package name is scanned first; the itinerary description is only
    consulted when the package name mentions no known destination.
    """
    def _scan(text: Optional[str]) -> List[str]:
        found: List[str] = []
        if not text:
            return found
        for canonical, aliases in DESTINATION_VOCABULARY:
            if canonical not in found and any(alias in text for alias in aliases):
                found.append(canonical)
        return found

    destinations = _scan(package_name)
    if not destinations:
        destinations = _scan(itinerary)
    return destinations


# ==================== Token table ====================

class TokenSpec(NamedTuple):
    name: str
    extract: Callable[[ContextBundle, Mapping[str, str]], str]
    requires_product: bool


def _destinations(ctx: ContextBundle, labels: Mapping[str, str]) -> str:
    return ", ".join(ctx.destinations) if ctx.destinations else labels["DESTINATION_FALLBACK"]


TOKEN_TABLE: Tuple[TokenSpec, ...] = (
    TokenSpec("userName", lambda ctx, labels: ctx.display_name, False),
    TokenSpec("packageName", lambda ctx, labels: ctx.product.package_name, True),
    TokenSpec("cruiseLine", lambda ctx, labels: ctx.product.cruise_line, True),
    TokenSpec("shipName", lambda ctx, labels: ctx.product.ship_name, True),
    TokenSpec("nights", lambda ctx, labels: str(ctx.product.nights), True),
    TokenSpec("days", lambda ctx, labels: str(ctx.product.days), True),
    TokenSpec("basePrice", lambda ctx, labels: format_price(ctx.product.base_price, labels["PRICE_ON_REQUEST"]), True),
    TokenSpec("startDate", lambda ctx, labels: format_date(ctx.product.start_date, labels["SCHEDULE_ON_REQUEST"]), True),
    TokenSpec("endDate", lambda ctx, labels: format_date(ctx.product.end_date, labels["SCHEDULE_ON_REQUEST"]), True),
    TokenSpec("destinations", _destinations, False),
    TokenSpec("여행지", _destinations, False),
)


def build_tokens(context: ContextBundle, labels: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Build the token mapping for a context bundle.

    Product tokens are only emitted when a product resolved, so templates
    rendered without a product keep those placeholders verbatim.
    """
    merged = dict(DEFAULT_LABELS)
    if labels:
        merged.update({k: v for k, v in labels.items() if v})

    tokens: Dict[str, str] = {}
    for spec in TOKEN_TABLE:
        if spec.requires_product and context.product is None:
            continue
        tokens[spec.name] = spec.extract(context, merged)
    return tokens


def render_all(templates: Sequence[Optional[str]], tokens: Mapping[str, str]) -> List[str]:
    """Render several templates (e.g. multi-way option labels) with one token map."""
    return [render(t, tokens) for t in templates]
