from __future__ import annotations

import re
from typing import Dict, Iterable, Optional

from ..errors import PlaceholderMismatchError

# Raw statement templates are resolved in a single pass so text produced for one
# placeholder is never rescanned for another one.


def render_template(template: str, replacements: Dict[str, str]) -> str:
    tokens = [t for t in replacements if t]
    if not tokens:
        return template
    # Longest first so a token that prefixes another cannot shadow it.
    pattern = re.compile('|'.join(re.escape(t) for t in sorted(tokens, key=len, reverse=True)))
    return pattern.sub(lambda m: replacements[m.group(0)], template)


def require_single(template: str, token: str, *, where: str) -> None:
    """Raise unless ``token`` occurs exactly once in ``template``."""
    found = template.count(token)
    if found != 1:
        raise PlaceholderMismatchError(
            f"Placeholder {token!r} must occur exactly once in {where}, found {found}"
        )


def require_distinct(tokens: Iterable[Optional[str]], *, where: str) -> None:
    present = [t for t in tokens if t]
    for i, a in enumerate(present):
        for b in present[i + 1:]:
            if a in b or b in a:
                raise PlaceholderMismatchError(
                    f"Placeholders {a!r} and {b!r} in {where} overlap; use distinct tokens"
                )
