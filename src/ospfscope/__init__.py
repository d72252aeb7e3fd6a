"""
ospfscope - OSPF Topology Reconstruction Toolkit

Rebuilds OSPF link-state topologies from router CLI output, compares
successive snapshots and annotates render-ready graphs with the
resulting network events.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
