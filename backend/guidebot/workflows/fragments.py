# /guidebot/workflows/fragments.py

"""
Rich-media fragments appended to (or prepended before) a node's information body.

Every fragment carries a marker comment, `<!-- guidebot:fragment=<kind>:<key> -->`,
so a later pass can tell which fragments are already present without parsing
the surrounding markup.
"""

import html
import json
import re
from enum import Enum
from typing import Iterable, List, Optional, Set

from guidebot.config import strings
from guidebot.models.context import MediaAsset, Testimonial


class FragmentKind(str, Enum):
    VIDEO = "video"
    IMAGE_GRID = "image-grid"
    TESTIMONIAL = "testimonial"


class Layout(str, Enum):
    GALLERY = "gallery"      # clickable horizontal strip
    GRID_2 = "grid-2"
    GRID_3 = "grid-3"
    STRIP = "strip"          # wide horizontal strip


MARKER_RE = re.compile(r"<!-- guidebot:fragment=([a-z-]+):([^\s>]+) -->")

YOUTUBE_ID_PATTERNS = [
    re.compile(r"youtu\.be/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/watch\?v=([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/shorts/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/embed/([A-Za-z0-9_-]{11})"),
]

SECTION_DIVIDER = "\n\n---\n\n"

_IMG_STYLE = {
    Layout.GALLERY: "flex: 1; min-width: 100px; max-width: 150px; height: 100px; object-fit: cover; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); cursor: pointer; transition: transform 0.2s;",
    Layout.GRID_2: "width: 100%; height: auto; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1);",
    Layout.GRID_3: "width: 100%; height: auto; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1);",
    Layout.STRIP: "flex: 1; min-width: 200px; max-width: 300px; height: auto; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1);",
}

_CONTAINER_STYLE = {
    Layout.GALLERY: "display: flex; gap: 8px; margin: 16px 0; flex-wrap: wrap;",
    Layout.GRID_2: "display: grid; grid-template-columns: repeat(2, 1fr); gap: 8px; margin: 16px 0;",
    Layout.GRID_3: "display: grid; grid-template-columns: repeat(3, 1fr); gap: 8px; margin: 16px 0;",
    Layout.STRIP: "display: flex; gap: 12px; margin: 16px 0; flex-wrap: wrap;",
}


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """Return the 11-character video id of a YouTube URL, or None."""
    if not url:
        return None
    for pattern in YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def marker(kind: FragmentKind, key: str) -> str:
    return f"<!-- guidebot:fragment={kind.value}:{key} -->"


def fragment_id(kind: FragmentKind, key: str) -> str:
    return f"{kind.value}:{key}"


def parse_markers(information: Optional[str]) -> Set[str]:
    """Collect the `kind:key` ids of every fragment already embedded in the body."""
    if not information:
        return set()
    return {f"{m.group(1)}:{m.group(2)}" for m in MARKER_RE.finditer(information)}


def video_fragment(title: str, body_lines: List[str], video_id: str) -> str:
    """Heading, description lines and a responsive YouTube embed."""
    parts = [f"\n\n📺 **{title}**"]
    parts.extend(line for line in body_lines if line)
    text = "\n\n".join(parts)
    embed = (
        '\n\n<div style="margin: 16px 0;"><div style="position: relative; padding-bottom: 56.25%; height: 0; '
        'overflow: hidden; border-radius: 8px; box-shadow: 0 4px 6px rgba(0,0,0,0.1);">'
        f'<iframe src="https://www.youtube.com/embed/{video_id}?rel=0&modestbranding=1" '
        'style="position: absolute; top: 0; left: 0; width: 100%; height: 100%; border: 0;" '
        'allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture" '
        "allowfullscreen></iframe></div></div>"
    )
    return text + embed + marker(FragmentKind.VIDEO, video_id)


def image_section(
    heading: str,
    assets: Iterable[MediaAsset],
    layout: Layout,
    alt_fallback: str,
    section_key: str,
) -> Optional[str]:
    """
    Image block in the given layout. Returns None when there are no assets so the
    caller can fall back to another asset set.
    """
    assets = list(assets)
    if not assets:
        return None

    gallery_attr = ""
    if layout is Layout.GALLERY:
        gallery_attr = html.escape(json.dumps([a.url for a in assets], ensure_ascii=False), quote=True)

    images = []
    for idx, asset in enumerate(assets):
        src = html.escape(asset.url, quote=True)
        alt = html.escape(asset.title or alt_fallback, quote=True)
        extra = ""
        if layout is Layout.GALLERY:
            extra = f' data-image-gallery="{gallery_attr}" data-image-index="{idx}" class="cruise-image-clickable"'
        images.append(
            f'<img src="{src}" alt="{alt}"{extra} style="{_IMG_STYLE[layout]}" '
            "onerror=\"this.style.display='none'; this.onerror=null;\" />"
        )

    section = f"\n\n{heading}\n\n"
    section += f'<div style="{_CONTAINER_STYLE[layout]}">' + "".join(images) + "</div>\n"
    if layout is Layout.GALLERY:
        section += f'<p style="font-size: 12px; color: #666; margin-top: -8px; margin-bottom: 8px;">{strings.IMAGE_CLICK_HINT}</p>\n'
    return section + marker(FragmentKind.IMAGE_GRID, section_key)


def testimonial_entries(testimonials: Iterable[Testimonial], max_body: int) -> str:
    """Numbered review entries with star ratings and truncated bodies."""
    lines = []
    for idx, review in enumerate(testimonials, start=1):
        author = review.author_name or strings.TESTIMONIAL_AUTHOR_FALLBACK
        title = review.title or strings.TESTIMONIAL_TITLE_FALLBACK
        stars = "⭐" * review.rating
        entry = f"**{idx}. {author}님** {stars}\n\"{title}\"\n"
        body = (review.body or "").strip()
        if body:
            if len(body) > max_body:
                body = body[:max_body] + "..."
            entry += f"{body}\n"
        lines.append(entry)
    return "\n".join(lines) + "\n"


def testimonial_section(entries: str, section_key: str, footer: Optional[str] = None) -> str:
    section = f"{strings.TESTIMONIALS_HEADING}\n\n{entries}"
    if footer:
        section += f"{footer}\n"
    return section + marker(FragmentKind.TESTIMONIAL, section_key)
