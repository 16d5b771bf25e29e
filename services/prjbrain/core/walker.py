# services/prjbrain/core/walker.py
from __future__ import annotations

import logging
import os
from typing import Callable, Collection, Iterator, Optional

from .errors import RootTraversalError, WalkAccessError

logger = logging.getLogger(__name__)

OnError = Callable[[WalkAccessError], None]


def _log_error(err: WalkAccessError) -> None:
    logger.warning(str(err))


def _sorted_entries(path: str) -> list:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


def walk(
    root_dir: str,
    skip_dir_names: Collection[str] = (),
    on_error: Optional[OnError] = None,
) -> Iterator[str]:
    """
    Yield the absolute path of every file under `root_dir`.

    - depth-first, entries visited in lexical name order
    - a directory whose name is in `skip_dir_names` is pruned with its
      whole subtree (the root itself is never pruned)
    - symlinks are not followed; a symlink is yielded like a file
    - an entry that cannot be read is reported through `on_error` and
      skipped; the rest of the tree is still walked

    Raises:
        RootTraversalError: `root_dir` cannot be listed
    """
    report = on_error or _log_error
    root = os.path.abspath(root_dir)

    try:
        entries = _sorted_entries(root)
    except OSError as e:
        logger.error(f"✗ Cannot walk {root}: {e}")
        raise RootTraversalError(f"Cannot walk {root}: {e}") from e

    # Stack of pending entry lists; reversed so pop() keeps lexical order.
    stack = [list(reversed(entries))]
    while stack:
        pending = stack[-1]
        if not pending:
            stack.pop()
            continue
        entry = pending.pop()

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            report(WalkAccessError(entry.path, e))
            continue

        if not is_dir:
            yield entry.path
            continue

        if entry.name in skip_dir_names:
            logger.debug(f"Skipping {entry.path}")
            continue

        try:
            children = _sorted_entries(entry.path)
        except OSError as e:
            report(WalkAccessError(entry.path, e))
            continue
        stack.append(list(reversed(children)))
