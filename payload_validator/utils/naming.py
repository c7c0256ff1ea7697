from __future__ import annotations

import re


_UPPER = re.compile(r"[A-Z]")


def to_snake_case(name: str) -> str:
    """Convert an internal camelCase identifier to its snake_case wire name.

    ``propB1`` -> ``prop_b1``; names without capitals are returned unchanged.
    """
    return _UPPER.sub(lambda m: f"_{m.group(0).lower()}", name)
