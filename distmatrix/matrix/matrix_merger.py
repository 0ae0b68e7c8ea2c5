"""
Merges per-call responses into a single distance matrix response.

When a request was split along its origins, each call returns whole rows
for a slice of origins and the rows are appended. When it was split along
its destinations, each call returns a slice of every row and the slices are
appended to the matching rows. Either way the merged response has one row
per origin and one element per destination, in request order.
"""

from .matrix_errors import RowCountMismatchError
from .matrix_types import DistanceMatrixResponse, MatrixRow, SplitAxis


def empty_response() -> DistanceMatrixResponse:
    """Starting accumulator for merge_response."""
    return DistanceMatrixResponse()


def merge_response(accumulator: DistanceMatrixResponse,
                   part: DistanceMatrixResponse,
                   axis: SplitAxis = SplitAxis.ORIGINS) -> DistanceMatrixResponse:
    """
    Add one call's addresses and rows to the accumulator, in call order.

    The accumulator takes the status of the last merged part. Parts are
    expected to be validated already.

    Args:
        accumulator: Response built from the previous calls
        part: Response of the next call
        axis: The list the request was split along

    Returns:
        The updated accumulator

    Raises:
        RowCountMismatchError: If a destination slice does not line up with
            the rows merged so far
    """
    first = not accumulator.rows

    if axis is SplitAxis.DESTINATIONS:
        if first:
            accumulator.origin_addresses.extend(part.origin_addresses)
            accumulator.rows.extend(MatrixRow(elements=list(row.elements)) for row in part.rows)
        else:
            if len(part.rows) != len(accumulator.rows):
                raise RowCountMismatchError(
                    f"Cannot merge {len(part.rows)} rows into {len(accumulator.rows)}"
                )
            for row, part_row in zip(accumulator.rows, part.rows):
                row.elements.extend(part_row.elements)
        accumulator.destination_addresses.extend(part.destination_addresses)
    else:
        if first:
            accumulator.destination_addresses.extend(part.destination_addresses)
        accumulator.origin_addresses.extend(part.origin_addresses)
        accumulator.rows.extend(part.rows)

    accumulator.status = part.status
    accumulator.error_message = part.error_message
    return accumulator
