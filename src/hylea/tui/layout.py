"""Panel geometry derived from the terminal size.

Two columns: the request column (method + URL row above the body editor)
and the response column (response viewer above the status bar). A footer
row spans the bottom. Every box has a one-cell border on each side.

compute_layout() is pure, so the same terminal size always yields the same
geometry and a repeated resize reflows to identical output.
"""

from __future__ import annotations

from dataclasses import dataclass

from hylea.core.methods import METHOD_ORDER

BORDER = 1
FOOTER_HEIGHT = 1
ROW_BOX_HEIGHT = 1 + 2 * BORDER
METHOD_BOX_WIDTH = max(len(m.value) for m in METHOD_ORDER) + 2 * BORDER


@dataclass(frozen=True)
class Box:
    width: int
    height: int

    @property
    def inner_width(self) -> int:
        return max(0, self.width - 2 * BORDER)

    @property
    def inner_height(self) -> int:
        return max(0, self.height - 2 * BORDER)


@dataclass(frozen=True)
class Layout:
    width: int
    height: int
    method: Box
    url: Box
    body: Box
    response: Box
    status: Box


def compute_layout(width: int, height: int) -> Layout:
    width = max(0, width)
    height = max(0, height)
    content_height = max(0, height - FOOTER_HEIGHT)

    left = width // 2
    right = width - left
    row_height = min(ROW_BOX_HEIGHT, content_height)
    lower_height = max(0, content_height - row_height)
    method_width = min(METHOD_BOX_WIDTH, left)

    return Layout(
        width=width,
        height=height,
        method=Box(method_width, row_height),
        url=Box(left - method_width, row_height),
        body=Box(left, lower_height),
        response=Box(right, lower_height),
        status=Box(right, row_height),
    )
