"""AI assistant front-end."""
from .session import AssistantSession, create_openai_client

__all__ = ["AssistantSession", "create_openai_client"]
