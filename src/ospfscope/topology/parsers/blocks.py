"""
LSA block splitter for 'show ip ospf database' output.

Slices raw multi-command text into area-header pseudo-blocks and LSA
content blocks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re

from ospfscope.topology.models import LSABlock

# Examples:
#                 Router Link States (Area 0)
#                 Net Link States (Area 1)
#                 Summary Net Link States (Area 0.0.0.2)
#                 Summary ASB Link States (Area 1)
#                 Type-7 AS External Link States (Area 3)
AREA_HEADER_PATTERN = re.compile(
    r"(?:Router|Net|Summary\s+Net|Summary\s+ASB?|Type-7\s+AS\s+External)\s+"
    r"Link\s+States\s+\(Area\s+([\d.]+)\)",
    re.IGNORECASE,
)

# "  LS age: 1234" or "  LS age: MAXAGE(3600)"
LSA_START_PATTERN = re.compile(
    r"^\s*LS age:\s*(?:\d+|MAXAGE\(\d+\))",
    re.IGNORECASE,
)


def split_lsa_blocks(lines: list[str]) -> list[LSABlock]:
    """Split database output lines into typed blocks.

    Area headers flush the open block and emit a pseudo-block carrying the
    area. An "LS age:" line (including MAXAGE ages) starts a new content
    block. Every other line joins the open block, or is dropped when no
    block has started yet, so command markers and banners between
    concatenated outputs are tolerated.

    Args:
        lines: Raw output lines

    Returns:
        Ordered list of LSABlock objects
    """
    blocks: list[LSABlock] = []
    current: list[str] | None = None

    def flush() -> None:
        nonlocal current
        if current:
            blocks.append(LSABlock(is_area_header=False, lines=current))
        current = None

    for line in lines:
        area_match = AREA_HEADER_PATTERN.search(line)
        if area_match:
            flush()
            blocks.append(LSABlock(is_area_header=True, area=area_match.group(1)))
            continue

        if LSA_START_PATTERN.match(line):
            flush()
            current = [line]
            continue

        if current is not None:
            current.append(line)

    flush()
    return blocks


def iter_content_blocks(blocks: list[LSABlock], default_area: str = "0"):
    """Yield (area, block) for content blocks, tracking area headers.

    Args:
        blocks: Output of split_lsa_blocks
        default_area: Area assumed before the first header

    Yields:
        Tuples of (current area, content block)
    """
    current_area = default_area
    for block in blocks:
        if block.is_area_header:
            current_area = block.area or current_area
            continue
        yield current_area, block
