from pathlib import Path

from sandbox_fs_mcp.models.session import NavigationContext


class SessionManager:
    """Manages navigation contexts for all user sessions, all sharing one sandbox root."""

    def __init__(self, root: Path) -> None:
        self._root = root
        # Simple dict as an in-process session storage.
        self._storage: dict[str, NavigationContext] = {}

    @property
    def root(self) -> Path:
        return self._root

    def get_context(self, session_id: str = "default") -> NavigationContext:
        """Returns or creates the navigation context for a given session."""
        if session_id not in self._storage:
            self._storage[session_id] = NavigationContext(root=self._root)
        return self._storage[session_id]
