"""
Base class for OSPF output parsers.

Provides common functionality for extracting link-state records and
auxiliary command data from device command output.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re
from abc import ABC, abstractmethod

from netaddr import AddrFormatError, IPAddress

from ospfscope.topology.models import (
    LSABlock,
    RawLink,
    RawRouterLSA,
    RawNetworkLSA,
    SummaryRoute,
    ExternalRoute,
    ProcessInfo,
    OSPFNeighborEntry,
    InterfaceDetail,
    LearnedRoute,
)
from ospfscope.topology.parsers.blocks import split_lsa_blocks


class OSPFOutputParser(ABC):
    """Abstract base class for OSPF output parsers.

    Each dialect-specific parser must implement the LSA extractors, the
    Router LSA link sub-block parser and the auxiliary command extractors.
    Parsers hold no per-call state, so one instance can be shared.
    """

    @property
    @abstractmethod
    def vendor(self) -> str:
        """Return the vendor name this parser supports."""
        pass

    # ==========================================================================
    # Block Splitting
    # ==========================================================================

    def split_blocks(self, output: str) -> list[LSABlock]:
        """Split database output into area-header and LSA content blocks.

        Args:
            output: Raw command output

        Returns:
            Ordered list of LSABlock objects
        """
        return split_lsa_blocks(self.clean_output(output).split("\n"))

    # ==========================================================================
    # LSA Extraction
    # ==========================================================================

    @abstractmethod
    def parse_router_lsas(self, blocks: list[LSABlock]) -> list[RawRouterLSA]:
        """Extract Type 1 Router LSAs.

        Args:
            blocks: Output of split_blocks

        Returns:
            List of RawRouterLSA objects
        """
        pass

    @abstractmethod
    def parse_network_lsas(self, blocks: list[LSABlock]) -> list[RawNetworkLSA]:
        """Extract Type 2 Network LSAs.

        Args:
            blocks: Output of split_blocks

        Returns:
            List of RawNetworkLSA objects
        """
        pass

    @abstractmethod
    def parse_summary_lsas(self, blocks: list[LSABlock]) -> list[SummaryRoute]:
        """Extract Type 3 and Type 4 Summary LSAs.

        Args:
            blocks: Output of split_blocks

        Returns:
            List of SummaryRoute objects
        """
        pass

    @abstractmethod
    def parse_external_lsas(self, blocks: list[LSABlock]) -> list[ExternalRoute]:
        """Extract Type 5 AS External LSAs.

        Args:
            blocks: Output of split_blocks

        Returns:
            List of ExternalRoute objects
        """
        pass

    @abstractmethod
    def parse_link_sub_blocks(self, lines: list[str]) -> list[RawLink]:
        """Extract link descriptors nested in one Router LSA block.

        Args:
            lines: Lines of a single Router LSA block

        Returns:
            List of RawLink objects
        """
        pass

    # ==========================================================================
    # Auxiliary Commands
    # ==========================================================================

    @abstractmethod
    def parse_process_info(self, output: str) -> ProcessInfo | None:
        """Parse 'show ip ospf' output.

        Args:
            output: Raw command output

        Returns:
            ProcessInfo, or None when no process header is present
        """
        pass

    @abstractmethod
    def parse_neighbor_table(self, output: str) -> list[OSPFNeighborEntry]:
        """Parse 'show ip ospf neighbor' output.

        Args:
            output: Raw command output

        Returns:
            List of OSPFNeighborEntry objects
        """
        pass

    @abstractmethod
    def parse_interface_detail(self, output: str) -> list[InterfaceDetail]:
        """Parse 'show ip ospf interface' output.

        Args:
            output: Raw command output

        Returns:
            List of InterfaceDetail objects
        """
        pass

    @abstractmethod
    def parse_route_table(self, output: str) -> list[LearnedRoute]:
        """Parse 'show ip route ospf' output.

        Args:
            output: Raw command output

        Returns:
            List of LearnedRoute objects
        """
        pass

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    @staticmethod
    def parse_prefix(prefix_str: str) -> tuple[str, int]:
        """Parse prefix string into network and length.

        Args:
            prefix_str: Prefix string (e.g., "10.0.0.0/8" or "10.0.0.0 255.0.0.0")

        Returns:
            Tuple of (network, prefix_length)
        """
        if "/" in prefix_str:
            network, length = prefix_str.split("/", 1)
            return network, int(length)

        if " " in prefix_str:
            network, mask = prefix_str.split()[:2]
            return network, OSPFOutputParser.mask_to_prefix_length(mask)

        return prefix_str, 32

    @staticmethod
    def mask_to_prefix_length(mask: str) -> int:
        """Convert "/24" or "255.255.255.0" to a prefix length.

        Args:
            mask: Mask in slash or dotted-quad form

        Returns:
            Prefix length (e.g., 24); 32 for an unparseable mask
        """
        mask = mask.strip()
        if mask.startswith("/"):
            return int(mask[1:])
        try:
            return IPAddress(mask).netmask_bits()
        except (AddrFormatError, ValueError):
            return 32

    @staticmethod
    def clean_output(output: str) -> str:
        """Clean command output by removing ANSI codes and carriage returns.

        Args:
            output: Raw command output

        Returns:
            Cleaned output
        """
        ansi_escape = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")
        output = ansi_escape.sub("", output)
        return output.replace("\r", "")
