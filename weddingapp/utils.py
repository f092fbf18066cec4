import html
from typing import Optional
import bleach


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip HTML markup from public intake text before it is stored.

    - Removes NULL bytes
    - Strips tags using bleach.clean(..., strip=True)
    - Undoes bleach's entity escaping; the API returns JSON, so ``&`` and
      ``<`` are stored as typed
    - Trims whitespace

    ``None`` passes through so optional fields stay optional.
    """
    if value is None:
        return None
    val = value.replace("\x00", "")
    val = html.unescape(bleach.clean(val, tags=set(), strip=True))
    return val.strip()
