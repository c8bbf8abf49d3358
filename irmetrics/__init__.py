"""
IR Metrics

Offline evaluation of TREC-style runs:
- TREC results and qrels parsing
- Grouping by run / iteration / query and relevance annotation
- Weighted-precision metrics (P@k, RBP)
"""

__version__ = "0.1.0"

from . import trec
from . import eval
