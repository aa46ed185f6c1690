"""
Lazy engine: view calculation, the operation queue and the fused
evaluator.
"""

from chainfuse.optimization.view import View, ViewTransform, compute_view
from chainfuse.optimization.operations import Action, ChainNode, LazyOp, OpKind, OpState, replay
from chainfuse.optimization.lazy_evaluator import LazyPipeline, is_lazy_eligible, lazy
