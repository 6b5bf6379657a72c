import logging
from typing import Callable, Iterable, List, Optional, Tuple, Type, TypeVar

from .errors import ChunkStoreError, ErrorList

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_batch(
    file_paths: Iterable[str],
    op: Callable[[str], T],
    action: str,
    collect: Tuple[Type[Exception], ...] = (ChunkStoreError, OSError),
) -> List[Optional[T]]:
    """
    Apply `op` to every path, continuing past failures.

    Returns one result per path in input order, None where the operation
    failed. Only exceptions of the `collect` types are gathered; anything
    else propagates at once. Raises ErrorList carrying those results if
    anything failed.
    """
    file_paths = list(file_paths)
    results: List[Optional[T]] = []
    errors: List[Tuple[str, Exception]] = []
    for file_path in file_paths:
        try:
            results.append(op(file_path))
        except collect as e:
            errors.append((file_path, e))
            results.append(None)

    if errors:
        logger.warning(f"{action} finished with {len(errors)} failure(s) out of {len(results)}")
    ErrorList.check(errors, results, file_paths)
    return results
