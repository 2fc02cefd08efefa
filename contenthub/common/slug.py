import re
import time
import unicodedata
from typing import Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

def generate(text: str) -> str:
    """Lowercase ASCII slug: diacritics stripped, non-alphanumeric runs become one '-'."""
    normalized = unicodedata.normalize("NFKD", text or "")
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALNUM.sub("-", ascii_text).strip("-")

def generate_with_timestamp(text: str) -> str:
    return f"{generate(text)}-{int(time.time() * 1000)}"

def generate_unique(text: str, existing: Iterable[str]) -> str:
    taken = set(existing)
    base = generate(text)
    slug = base
    counter = 1
    while slug in taken:
        slug = f"{base}-{counter}"
        counter += 1
    return slug
