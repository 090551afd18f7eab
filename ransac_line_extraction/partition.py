"""
In-place partitioning of the working node array.

The array is split at a logical size: [0, size) is active, [size, capacity)
holds nodes removed by accepted or in-progress trials. Every operation here
only permutes the array, nothing is ever copied out of it or dropped.
"""

import numpy as np
from typing import Optional


def pop_node(index: int, nodes: np.ndarray, size: int) -> int:
    """
    Move the node at index to the end of the active range.

    The nodes after index shift one slot left, so the remaining active
    nodes keep their relative order.

    Args:
        index: Active index to pop
        nodes: Working array
        size: Current active size

    Returns:
        The new active size (size - 1)
    """
    if not 0 <= index < size:
        raise IndexError(f'pop index {index} outside active range [0, {size})')

    popped = nodes[index:index + 1].copy()
    # numpy handles the overlapping slices
    nodes[index:size - 1] = nodes[index + 1:size]
    nodes[size - 1] = popped[0]
    return size - 1


def restore_trial(
    nodes: np.ndarray,
    original_size: int,
    scratch: Optional[np.ndarray] = None
) -> int:
    """
    Undo a failed trial by re-sorting [0, original_size) by angle.

    Args:
        nodes: Working array
        original_size: Active size before the trial started
        scratch: Optional preallocated buffer with len >= original_size

    Returns:
        original_size, the restored active size
    """
    order = np.argsort(nodes['angle'][:original_size], kind='stable')
    if scratch is None:
        nodes[:original_size] = nodes[:original_size][order]
    else:
        np.take(nodes[:original_size], order, out=scratch[:original_size])
        nodes[:original_size] = scratch[:original_size]
    return original_size
