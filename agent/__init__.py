"""Natural-language agent: turns model replies into ledger actions."""

from agent.dispatcher import IntentDispatcher
from agent.orchestrator import AgentOrchestrator
from agent.parser import parse

__all__ = ["AgentOrchestrator", "IntentDispatcher", "parse"]
