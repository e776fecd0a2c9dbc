# /guidebot/workflows/augmentation.py

"""
Content augmentation for rendered flow nodes.

Walks AUGMENTATION_RULES in order and adds the fragment of every rule that
matches the node. Re-running augmentation on an already augmented body adds
nothing: fragments are recognised by the marker they carry, by their stable
media id (videos) or by their section heading (grids and testimonials).

A rule whose asset lookup fails is logged and skipped; it never aborts the
remaining rules.
"""

import logging
from itertools import islice
from typing import Dict, Iterator, List, Optional, Protocol, Sequence, Set

from guidebot.config import strings
from guidebot.config.media import CRUISE_LINE_VIDEOS, DEFAULT_CRUISE_LINE, DEFAULT_CRUISE_LINE_VIDEO
from guidebot.config.settings import settings
from guidebot.models.context import ContextBundle, MediaAsset, Testimonial
from guidebot.models.flow import FlowNode
from guidebot.utils.metrics import augmentation_operations_counter
from guidebot.workflows import fragments
from guidebot.workflows.definitions import AUGMENTATION_RULES, AugmentationRule
from guidebot.workflows.fragments import FragmentKind, Layout
from guidebot.workflows.interpolator import render

logger = logging.getLogger(__name__)


class AssetSource(Protocol):
    """Lookup capabilities the rules draw media from."""

    def destination_images(self, hints: Sequence[str], count: int) -> Iterator[MediaAsset]: ...

    def cruise_review_images(self, hints: Sequence[str], count: int) -> Iterator[MediaAsset]: ...

    def room_images(self, hints: Sequence[str], count: int) -> Iterator[MediaAsset]: ...

    async def recent_testimonials(self, limit: int) -> List[Testimonial]: ...


# ==================== Matching ====================

def rule_matches(rule: AugmentationRule, node: FlowNode) -> bool:
    """A rule fires on an exact position, a position inside its range, or a text pattern."""
    position = node.position
    if position in rule.get("positions", ()):
        return True

    bounds = rule.get("position_range")
    if bounds and bounds[0] <= position <= bounds[1]:
        return True

    text = node.question_text or ""
    return any(pattern in text for pattern in rule.get("text_patterns", ()))


def matching_rules(node: FlowNode) -> List[AugmentationRule]:
    return [rule for rule in AUGMENTATION_RULES if rule_matches(rule, node)]


# ==================== Variant selection ====================

def cruise_line_video_url(cruise_line: Optional[str]) -> Optional[str]:
    """Real-trip video for a cruise line, matched by keyword on the upper-cased name."""
    if not cruise_line:
        return None
    upper_line = cruise_line.upper()
    for key, url in CRUISE_LINE_VIDEOS.items():
        if key.upper() in upper_line:
            return url
    return None


def select_video(rule: AugmentationRule, node: FlowNode, context: Optional[ContextBundle]) -> Optional[Dict[str, str]]:
    """
    Pick the video a rule shows for this node.

    Returns a dict with title, url and description, or None when the rule has
    no video for the node.
    """
    position_videos = rule.get("position_videos", {})
    if node.position in position_videos and position_videos[node.position] is None:
        return None

    shared_position = rule.get("node_videos", {}).get(node.position, {})
    if node.id in shared_position:
        return shared_position[node.id]

    if node.position in position_videos:
        return position_videos[node.position]

    video = rule.get("video")
    if video == "cruise_line":
        return _cruise_line_video(context)
    return video


def _cruise_line_video(context: Optional[ContextBundle]) -> Dict[str, str]:
    if context is not None and context.product is not None:
        url = cruise_line_video_url(context.product.cruise_line)
        if url:
            return {
                "title": render(strings.CRUISE_LINE_VIDEO_TITLE, {"cruiseLine": context.product.cruise_line}),
                "url": url,
                "description": "",
            }
    return {
        "title": render(strings.CRUISE_LINE_VIDEO_TITLE, {"cruiseLine": DEFAULT_CRUISE_LINE}),
        "url": DEFAULT_CRUISE_LINE_VIDEO,
        "description": "",
    }


def product_hints(source: str, context: Optional[ContextBundle]) -> List[str]:
    """Asset hints for the product-specific variant; empty without a product."""
    if context is None or context.product is None:
        return []
    product = context.product
    if source == "destination":
        return list(context.matched_destinations)
    if source == "cruise_review":
        return list(context.matched_destinations) + [h for h in (product.ship_name,) if h]
    if source == "room":
        return [h for h in (product.ship_name,) if h]
    return []


def _fetch_images(assets: AssetSource, source: str, hints: Sequence[str], count: int) -> List[MediaAsset]:
    provider = {
        "destination": assets.destination_images,
        "cruise_review": assets.cruise_review_images,
        "room": assets.room_images,
    }[source]
    return list(islice(provider(hints, count), count))


# ==================== Rule application ====================

def _apply_video(rule: AugmentationRule, node: FlowNode, information: str,
                 context: Optional[ContextBundle], present: Set[str]) -> Optional[str]:
    video = select_video(rule, node, context)
    if not video:
        return None

    video_id = fragments.extract_youtube_id(video["url"])
    if not video_id:
        logger.warning(f"Rule {rule['name']} has a video without a YouTube id: {video['url']}")
        return None

    if fragments.fragment_id(FragmentKind.VIDEO, video_id) in present or video_id in information:
        return None

    present.add(fragments.fragment_id(FragmentKind.VIDEO, video_id))
    fragment = fragments.video_fragment(video["title"], [video.get("description", ""), rule.get("cta", "")], video_id)
    return information + fragment


def _apply_image_grid(rule: AugmentationRule, information: str, context: Optional[ContextBundle],
                      assets: AssetSource, present: Set[str]) -> Optional[str]:
    section_id = fragments.fragment_id(FragmentKind.IMAGE_GRID, rule["section_key"])
    if section_id in present or rule["heading"] in information:
        return None

    source, count = rule["source"], rule["count"]
    images: List[MediaAsset] = []
    hints = product_hints(source, context)
    if hints:
        images = _fetch_images(assets, source, hints, count)
    if not images:
        default_hints = rule.get("default_hints", [settings.default_media_tag])
        images = _fetch_images(assets, source, default_hints, count)

    section = fragments.image_section(rule["heading"], images, Layout(rule["layout"]), rule["alt"], rule["section_key"])
    if section is None:
        logger.warning(f"No images available for rule {rule['name']}")
        return None

    present.add(section_id)
    return information + section


async def _apply_testimonials(rule: AugmentationRule, information: str,
                              assets: AssetSource, present: Set[str]) -> Optional[str]:
    section_id = fragments.fragment_id(FragmentKind.TESTIMONIAL, rule["section_key"])
    if section_id in present or strings.TESTIMONIALS_HEADING in information:
        return None

    reviews: List[Testimonial] = []
    try:
        reviews = await assets.recent_testimonials(rule["limit"])
    except Exception as e:
        logger.warning(f"Testimonial lookup failed for rule {rule['name']}, using default reviews: {e}")

    if reviews:
        entries = fragments.testimonial_entries(reviews[: rule["limit"]], rule["max_body"])
    else:
        entries = rule["default_entries"]
    section = fragments.testimonial_section(entries, rule["section_key"], rule.get("footer"))

    present.add(section_id)
    if rule.get("placement") == "prepend":
        return section + fragments.SECTION_DIVIDER + information
    return information + "\n\n" + section


async def augment(node: FlowNode, information: Optional[str],
                  context: Optional[ContextBundle], assets: AssetSource) -> str:
    """
    Apply every matching augmentation rule to a rendered information body.

    Args:
        node: The flow node being resolved (position, id and raw question text select rules)
        information: Rendered information body; None is treated as empty
        context: Rendering context, or None when no context is available
        assets: Media and testimonial lookups

    Returns:
        The information body with the matching fragments added
    """
    information = information or ""
    present = fragments.parse_markers(information)

    for rule in matching_rules(node):
        try:
            kind = rule["kind"]
            if kind == FragmentKind.VIDEO.value:
                updated = _apply_video(rule, node, information, context, present)
            elif kind == FragmentKind.IMAGE_GRID.value:
                updated = _apply_image_grid(rule, information, context, assets, present)
            elif kind == FragmentKind.TESTIMONIAL.value:
                updated = await _apply_testimonials(rule, information, assets, present)
            else:
                logger.error(f"Unknown fragment kind {kind!r} in rule {rule['name']}")
                continue
        except Exception as e:
            augmentation_operations_counter.labels(rule=rule["name"], status="failed").inc()
            logger.error(f"Augmentation rule {rule['name']} failed for node {node.id}: {e}", exc_info=True)
            continue

        if updated is None:
            augmentation_operations_counter.labels(rule=rule["name"], status="skipped").inc()
        else:
            augmentation_operations_counter.labels(rule=rule["name"], status="applied").inc()
            information = updated

    return information
