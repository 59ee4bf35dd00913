"""Resource namespaces for the OpenJustice SDK."""

from .conversations import Conversations
from .documents import Documents
from .nap import Nap
from .resources import Resources

__all__ = [
    "Conversations",
    "Documents",
    "Nap",
    "Resources",
]
