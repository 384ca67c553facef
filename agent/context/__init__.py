from agent.context.builder import build_user_context
from agent.context.resolver import ResolvedContext, resolve_system_context

__all__ = ["build_user_context", "ResolvedContext", "resolve_system_context"]
