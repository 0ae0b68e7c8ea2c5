"""
Splits a distance matrix request into calls the service will accept.

Each call is limited both in elements (origins x destinations) and in URL
length. The partitioner works out how many calls are needed and slices the
longer of the two coordinate lists into contiguous blocks, one per call.
"""

import math
from typing import List, Sequence, Tuple, TypeVar

from .matrix_errors import EmptyInputError, MaxElementsExceededError
from .matrix_types import CallGroup, Coordinate, SplitAxis


T = TypeVar("T")


def compute_call_count(origins_count: int,
                       destinations_count: int,
                       element_cap: int,
                       rendered_url_length: int,
                       max_url_length: int) -> int:
    """
    Minimum number of calls satisfying both the element and URL length limits.

    Args:
        origins_count: Number of origins in the whole request
        destinations_count: Number of destinations in the whole request
        element_cap: Elements allowed per call
        rendered_url_length: Length of the unsplit request's encoded URL
        max_url_length: Longest URL the service accepts

    Returns:
        Number of calls, at least 1
    """
    if element_cap <= 0:
        raise ValueError(f"element_cap must be positive, got {element_cap}")
    if max_url_length <= 0:
        raise ValueError(f"max_url_length must be positive, got {max_url_length}")

    calls_by_elements = math.ceil(origins_count * destinations_count / element_cap)
    calls_by_url = math.ceil(rendered_url_length / max_url_length)

    return max(calls_by_elements, calls_by_url, 1)


def split_into_blocks(items: Sequence[T], block_count: int) -> List[Sequence[T]]:
    """
    Split items into contiguous blocks of floor(len / block_count) items.

    The last block takes the remainder. Never yields an empty block: asking
    for more blocks than items gives one block per item.
    """
    size = len(items)
    if size == 0:
        return []

    block_count = max(1, min(block_count, size))
    block_size = max(1, size // block_count)

    blocks = []
    for index in range(block_count):
        start = index * block_size
        end = size if index == block_count - 1 else start + block_size
        blocks.append(items[start:end])
    return blocks


def choose_split_axis(origins_count: int,
                      destinations_count: int,
                      call_count: int) -> SplitAxis:
    """The list partition() splits: the longer one, destinations on a tie."""
    if call_count <= 1:
        return SplitAxis.NONE
    if destinations_count >= origins_count:
        return SplitAxis.DESTINATIONS
    return SplitAxis.ORIGINS


def partition(origins: Sequence[Coordinate],
              destinations: Sequence[Coordinate],
              call_count: int) -> List[CallGroup]:
    """
    Slice a request into ordered call groups.

    The longer list is split (destinations on a tie) and every block is
    paired with the whole of the other list, so concatenating the groups'
    slices in order gives back the original lists.

    Raises:
        EmptyInputError: If origins or destinations are empty
    """
    if not origins:
        raise EmptyInputError("At least one origin is required")
    if not destinations:
        raise EmptyInputError("At least one destination is required")

    origins = tuple(origins)
    destinations = tuple(destinations)

    axis = choose_split_axis(len(origins), len(destinations), call_count)

    if axis is SplitAxis.NONE:
        return [CallGroup(origins=origins, destinations=destinations)]

    if axis is SplitAxis.DESTINATIONS:
        return [
            CallGroup(origins=origins, destinations=block)
            for block in split_into_blocks(destinations, call_count)
        ]

    return [
        CallGroup(origins=block, destinations=destinations)
        for block in split_into_blocks(origins, call_count)
    ]


def partition_within_cap(origins: Sequence[Coordinate],
                         destinations: Sequence[Coordinate],
                         call_count: int,
                         element_cap: int) -> Tuple[List[CallGroup], int]:
    """
    Partition into at least ``call_count`` groups, none above ``element_cap``.

    The last block absorbs the remainder, so the count from
    compute_call_count can leave it over the cap (13 x 15 at cap 100 gives
    7 + 8 destinations, and 13 x 8 = 104). The count is raised until every
    group fits.

    Returns:
        The groups and the call count that produced them

    Raises:
        EmptyInputError: If origins or destinations are empty
        MaxElementsExceededError: If even one-item blocks exceed the cap
    """
    groups = partition(origins, destinations, call_count)
    split_size = max(len(origins), len(destinations))

    while max(group.element_count for group in groups) > element_cap:
        if call_count >= split_size:
            raise MaxElementsExceededError(
                f"{len(origins)}x{len(destinations)} cannot be split into calls of at most "
                f"{element_cap} elements",
                status="MAX_ELEMENTS_EXCEEDED",
            )
        call_count += 1
        groups = partition(origins, destinations, call_count)

    return groups, call_count
