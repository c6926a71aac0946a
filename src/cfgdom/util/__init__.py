"""
Utility modules for cfgdom.

- Graph algorithms: reverse post-order and dominator sets (graphalgorithim/)
- Application-level utilities: timed console scopes (application/)
- I/O and formatting utilities (io/)
"""
