"""Decision engine package: heuristic opponent and shared decision models."""

from tictactoe.engine.heuristic import HeuristicEngine
from tictactoe.engine.search import Condition, Decision, DecisionRule, IDecisionEngine

__all__ = [
    "Condition",
    "Decision",
    "DecisionRule",
    "HeuristicEngine",
    "IDecisionEngine",
]
