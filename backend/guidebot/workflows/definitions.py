# /guidebot/workflows/definitions.py

"""
Content augmentation rules as pure data (no logic).

Rules are evaluated in list order and several may fire for the same node.
Each rule selects nodes by:
- positions: exact position values
- position_range: inclusive (low, high) bounds, fractional values allowed
- text_patterns: substrings of the raw question text

and describes one fragment:
- kind: "video" | "image-grid" | "testimonial"
- placement: "append" (after the body) or "prepend" (before it, behind a divider)

Video rules pick the video for a position shared by several nodes by node
identity (node_videos, keyed by position then node id), then by position
(position_videos), then fall back to `video`. A position mapped to None never
carries a video, whatever node sits there.
"""

from typing import Dict, Any, List

from guidebot.config import strings
from guidebot.config.media import (
    PROBLEM_VIDEOS,
    SOLUTION_VIDEOS,
    BALCONY_ROOM_VIDEO,
    DESTINATION_PHOTO_PHRASES,
    BUSAN_QUESTION_PHRASE,
)

# Type definition for a rule
AugmentationRule = Dict[str, Any]

# Nodes that share position 18 but each introduce a different solution video.
# Node ids only select a video at the position they are listed under.
SOLUTION_NODE_VIDEOS: Dict[float, Dict[int, Dict[str, str]]] = {
    18: {
        19: SOLUTION_VIDEOS[4],
        20: SOLUTION_VIDEOS[5],
        21: SOLUTION_VIDEOS[6],
    },
}

AUGMENTATION_RULES: List[AugmentationRule] = [
    {
        "name": "cruise_photos",
        "positions": [2],
        "kind": "image-grid",
        "source": "cruise_review",
        "count": 3,
        "layout": "gallery",
        "heading": strings.CRUISE_PHOTOS_HEADING,
        "alt": strings.CRUISE_PHOTO_ALT,
        "section_key": "cruise-photos",
        "placement": "append",
    },
    {
        "name": "cruise_line_video",
        "positions": [3],
        "kind": "video",
        "video": "cruise_line",
        "cta": strings.CRUISE_LINE_VIDEO_CTA,
        "placement": "append",
    },
    {
        # Reviews only; the solution video rule maps this position to None.
        "name": "mall_reviews",
        "positions": [11],
        "kind": "testimonial",
        "limit": 3,
        "max_body": 100,
        "footer": strings.MORE_REVIEWS_LINK,
        "default_entries": strings.DEFAULT_REVIEWS_BODY,
        "section_key": "mall-reviews",
        "placement": "prepend",
    },
    {
        "name": "cruise_review_photos",
        "positions": [6],
        "kind": "image-grid",
        "source": "cruise_review",
        "count": 9,
        "layout": "grid-3",
        "heading": strings.CRUISE_REVIEW_PHOTOS_HEADING,
        "alt": strings.CRUISE_REVIEW_PHOTO_ALT,
        "section_key": "cruise-review-photos",
        "placement": "append",
    },
    {
        "name": "terminal_reviews",
        "positions": [4],
        "kind": "testimonial",
        "limit": 2,
        "max_body": 80,
        "footer": None,
        "default_entries": strings.DEFAULT_TERMINAL_REVIEWS_BODY,
        "section_key": "terminal-reviews",
        "placement": "prepend",
    },
    {
        "name": "destination_photos",
        "positions": [4],
        "text_patterns": DESTINATION_PHOTO_PHRASES,
        "kind": "image-grid",
        "source": "destination",
        "count": 5,
        "layout": "grid-2",
        "heading": strings.DESTINATION_PHOTOS_HEADING,
        "alt": strings.DESTINATION_PHOTO_ALT,
        "section_key": "destination-photos",
        "placement": "append",
    },
    {
        "name": "room_photos",
        "positions": [21],
        "kind": "image-grid",
        "source": "room",
        "count": 3,
        "layout": "strip",
        "heading": strings.ROOM_PHOTOS_HEADING,
        "alt": strings.ROOM_PHOTO_ALT,
        "section_key": "room-photos",
        "default_hints": [],
        "placement": "append",
    },
    {
        "name": "busan_video",
        "positions": [4.5],
        "text_patterns": [BUSAN_QUESTION_PHRASE],
        "kind": "video",
        "video": PROBLEM_VIDEOS[0],
        "cta": strings.BUSAN_VIDEO_CTA,
        "placement": "append",
    },
    {
        "name": "problem_videos",
        "position_range": (7, 9),
        "kind": "video",
        "position_videos": {
            7: PROBLEM_VIDEOS[1],
            8: PROBLEM_VIDEOS[2],
            9: PROBLEM_VIDEOS[3],
        },
        "cta": strings.PROBLEM_VIDEO_CTA,
        "placement": "append",
    },
    {
        "name": "solution_videos",
        "position_range": (10, 18.7),
        "kind": "video",
        "node_videos": SOLUTION_NODE_VIDEOS,
        "position_videos": {
            10: SOLUTION_VIDEOS[3],
            11: None,
            12: SOLUTION_VIDEOS[5],
            13: SOLUTION_VIDEOS[4],
            14: SOLUTION_VIDEOS[0],
            15: SOLUTION_VIDEOS[1],
            16: SOLUTION_VIDEOS[2],
            17: SOLUTION_VIDEOS[6],
            18: SOLUTION_VIDEOS[4],
            18.5: SOLUTION_VIDEOS[5],
            18.7: SOLUTION_VIDEOS[6],
        },
        "cta": strings.SOLUTION_VIDEO_CTA,
        "placement": "append",
    },
    {
        "name": "balcony_video",
        "positions": [20.5],
        "kind": "video",
        "video": BALCONY_ROOM_VIDEO,
        "cta": strings.BALCONY_VIDEO_CTA,
        "placement": "append",
    },
]
