"""
Resize target selection for page requests.
"""

from typing import Tuple

from .models import ResizeTarget


def resolve_resize_target(max_height: int, max_width: int) -> ResizeTarget:
    """Turn a caller's bounding box into a concrete resize target.

    The larger bound is kept and the other axis is left at 0 (auto) so the
    source aspect ratio is preserved. Equal bounds keep both axes, which
    stretches non-square sources into the square box.

    Negative bounds are treated as 0.
    """
    max_height = max(int(max_height), 0)
    max_width = max(int(max_width), 0)

    if max_width > max_height:
        return ResizeTarget(height=0, width=max_width)
    if max_height > max_width:
        return ResizeTarget(height=max_height, width=0)
    return ResizeTarget(height=max_height, width=max_width)


def scaled_size(source_size: Tuple[int, int], target: ResizeTarget) -> Tuple[int, int]:
    """Compute the (width, height) the source should be resized to."""
    src_width, src_height = source_size
    if target.is_passthrough:
        return src_width, src_height

    width, height = target.width, target.height
    if width == 0:
        width = max(1, round(src_width * height / src_height))
    elif height == 0:
        height = max(1, round(src_height * width / src_width))
    return width, height
