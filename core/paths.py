from __future__ import annotations

from typing import Dict, List, Optional


def reconstruct_path(back_pointers: Dict[int, Optional[int]], end: int) -> List[int]:
    """Follow predecessor indices from ``end`` back to the root.

    The root is the node whose predecessor is ``None``. Returns the route
    root-first; an ``end`` with no recorded predecessor yields ``[]``.
    """
    if end not in back_pointers:
        return []
    path: List[int] = []
    seen = set()
    cur: Optional[int] = end
    while cur is not None:
        if cur in seen:
            raise ValueError(f"Back-pointer loop at {cur}")
        seen.add(cur)
        path.append(cur)
        cur = back_pointers.get(cur)
    path.reverse()
    return path
