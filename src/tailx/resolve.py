"""Mapping of an offset onto a zero-based start position"""

from tailx.offset import Offset, ZeroFromStart


def resolve_start_index(offset: Offset, total: int) -> int | None:
    """Resolve where emission starts within a source of ``total`` units.

    Returns the zero-based start position, or None when nothing should be emitted.

    - ``+0`` starts at 0 unless the source is empty
    - ``0`` takes zero units
    - positive K past the last unit is impossible; K == total is the last unit
    - negative -K larger than the source clamps to 0 (the whole source)
    """
    if total < 0:
        raise ValueError(f'Total must be non-negative, got {total}')

    if isinstance(offset, ZeroFromStart):
        return 0 if total > 0 else None

    num = offset.value
    if num == 0 or total == 0 or num > total:
        return None

    if num < 0:
        return max(total + num, 0)
    return num - 1
