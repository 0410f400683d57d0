from client.agent_client import AgentClient, AgentRequestError
from client.store import AgentState, ConversationStore, open_session

__all__ = [
    "AgentClient",
    "AgentRequestError",
    "AgentState",
    "ConversationStore",
    "open_session",
]
