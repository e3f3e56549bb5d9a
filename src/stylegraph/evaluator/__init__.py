"""Dataflow evaluator."""

from stylegraph.evaluator.core import Evaluation, evaluate, evaluate_node
from stylegraph.evaluator.types import EvaluationContext, EvaluationResult

__all__ = [
    "Evaluation",
    "EvaluationContext",
    "EvaluationResult",
    "evaluate",
    "evaluate_node",
]
