"""
cfgdom CLI tools.

- dom: print dominator sets
- rpo: print the reverse post-order
- dot: dump the CFG as a DOT graph
"""

from .main import main

__all__ = ["main"]
