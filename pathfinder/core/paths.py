# pathfinder/core/paths.py
#!/usr/bin/env python3
from typing import List, Optional, Set

from pathfinder.core.errors import BrokenPredecessorChain
from pathfinder.core.types import Cell, SearchState

MAX_PATH_HOPS = 5000


def reconstruct_path(search: SearchState, end: Cell, limit: Optional[int] = None) -> List[Cell]:
    """
    Walk predecessor links back from `end` and return the path front-to-back.

    A cell with no predecessor gives [end]. The walk is bounded by `limit` hops
    (MAX_PATH_HOPS if not given); hitting the bound or looping back onto a cell
    raises BrokenPredecessorChain.
    """
    bound = MAX_PATH_HOPS if limit is None else limit
    path: List[Cell] = []
    seen: Set[Cell] = set()
    cur: Optional[Cell] = end
    while cur is not None:
        if cur in seen:
            raise BrokenPredecessorChain(end, len(path), at=cur)
        if len(path) >= bound:
            raise BrokenPredecessorChain(end, len(path))
        seen.add(cur)
        path.append(cur)
        cur = search.predecessor.get(cur)
    path.reverse()
    return path
