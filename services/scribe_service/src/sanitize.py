# src/sanitize.py
import hashlib
from typing import Any, List, Optional

def hash_preview(s: Any, n: int = 12) -> str:
    if not isinstance(s, str):
        s = str(s)
    return f"sha256={hashlib.sha256(s.encode('utf-8')).hexdigest()[:n]},len={len(s)}"

def normalize_text(value: Any, max_len: Optional[int] = None) -> str:
    """
    Trim a caller- or model-supplied string and clamp it to `max_len` characters.
    Anything that is not a string becomes "". Never raises.
    """
    if not isinstance(value, str):
        return ""
    text = value.strip()
    if max_len is not None and len(text) > max_len:
        # cut at the exact position, then drop whitespace exposed by the cut
        text = text[:max(max_len, 0)].rstrip()
    return text

def normalize_string_array(
    value: Any,
    max_items: Optional[int] = None,
    max_len_each: Optional[int] = None,
) -> List[str]:
    """
    Keep the non-blank string elements of `value`, each clamped with normalize_text,
    stopping once `max_items` have been collected. Non-lists become [].
    """
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        if max_items is not None and len(out) >= max_items:
            break
        text = normalize_text(item, max_len_each)
        if text:
            out.append(text)
    return out
