"""cfgdom - dominator sets for control flow graphs.
"""

__version__ = "0.1.0"

from .analysis.cfg.dom import DominanceAnalysis, evaluate
from .application.config import AnalysisConfig
from .application.errors import UnknownBlock, SpecSyntaxError

__all__ = [
    "DominanceAnalysis",
    "evaluate",
    "AnalysisConfig",
    "UnknownBlock",
    "SpecSyntaxError",
    "__version__",
]
