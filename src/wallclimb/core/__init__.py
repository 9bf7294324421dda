"""Core framework components for WALLCLIMB."""

from .state import TurnPhase, TurnOutcome, StateMachine
from .events import EventBus, Event, EventType

__all__ = ["TurnPhase", "TurnOutcome", "StateMachine", "EventBus", "Event", "EventType"]
