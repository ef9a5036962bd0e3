"""Utility modules."""

from rfp_desk.utils.logger import bind_context, get_logger, log_agent_step, unbind_context
from rfp_desk.utils.tracing import get_tracer, init_tracing, shutdown_tracing

__all__ = [
    "bind_context",
    "get_logger",
    "log_agent_step",
    "unbind_context",
    "get_tracer",
    "init_tracing",
    "shutdown_tracing",
]
