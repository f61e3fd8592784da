from .model import AgentState, ReportingConfiguration
from .schedule import add_jitter
from .service import ReportingAgent

__all__ = ["AgentState", "ReportingConfiguration", "ReportingAgent", "add_jitter"]
