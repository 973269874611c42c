"""
Best-response dynamics engine: single-player decisions, visited-profile
bookkeeping and the converge-or-exhaust state machine.
"""

from brdsim.dynamics.best_response import Decision, evaluate
from brdsim.dynamics.engine import DynamicsEngine, EngineState, StepRecord, run_single_game
from brdsim.dynamics.outcome import GameOutcome, Status
from brdsim.dynamics.registry import VisitedProfileRegistry
