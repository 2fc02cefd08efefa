import html as html_lib
import re
from datetime import datetime
from typing import Any, Dict, Optional

_TAG = re.compile(r"<[^>]+>")
_WHITESPACE = re.compile(r"\s+")

def generate_json_ld(
    title: str,
    description: Optional[str] = None,
    url: Optional[str] = None,
    image: Optional[str] = None,
    author: Optional[str] = None,
    date_published: Optional[datetime] = None,
    date_modified: Optional[datetime] = None,
    type: str = "Article",
) -> Dict[str, Any]:
    json_ld: Dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": type,
        "headline": title,
    }
    if description:
        json_ld["description"] = description
    if url:
        json_ld["url"] = url
    if image:
        json_ld["image"] = image
    if author:
        json_ld["author"] = {"@type": "Person", "name": author}
    if date_published:
        json_ld["datePublished"] = date_published.isoformat()
    if date_modified:
        json_ld["dateModified"] = date_modified.isoformat()
    return json_ld

def generate_title(title: str, site_name: Optional[str] = None) -> str:
    return f"{title} | {site_name}" if site_name else title

def strip_html(content: str) -> str:
    text = html_lib.unescape(_TAG.sub(" ", content or ""))
    return _WHITESPACE.sub(" ", text).strip()

def generate_description(content: str, max_length: int = 160) -> str:
    """Plain-text excerpt of `content`, cut on a word boundary with a trailing '...'."""
    text = strip_html(content)
    if len(text) <= max_length:
        return text

    truncated = text[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        truncated = truncated[:last_space]
    return truncated.rstrip() + "..."
