"""
Graph algorithms for control flow analysis.

- Dominator set lattice values with an explicit universal set (domset)
- Reverse post-order numbering and the iterative dominator solver (dominator)
"""
