"""
OSPF output parsers.

Provides the LSA block splitter and regex-based parsers for converting
OSPF command output into link-state records.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from ospfscope.topology.parsers.blocks import split_lsa_blocks, iter_content_blocks
from ospfscope.topology.parsers.base import OSPFOutputParser
from ospfscope.topology.parsers.cisco_ios import CiscoIOSParser

__all__ = [
    "split_lsa_blocks",
    "iter_content_blocks",
    "OSPFOutputParser",
    "CiscoIOSParser",
]
