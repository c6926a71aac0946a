"""Control Flow Graph (CFG) analysis modules.

This package contains the CFG representation built from edge records, the
dominance analysis over it, and its report/visualization and networkx
interop helpers.
"""
