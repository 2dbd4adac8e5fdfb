"""Client library: HTTP client and optimistic dashboard state."""

from tododash.client.api import TodoApiClient
from tododash.client.dashboard import DashboardController
from tododash.client.state import InvalidTransition, ItemState, OptimisticTodoList, Selection

__all__ = [
    "TodoApiClient",
    "DashboardController",
    "InvalidTransition",
    "ItemState",
    "OptimisticTodoList",
    "Selection",
]
