from pathlib import Path
from threading import Lock

from pydantic import BaseModel, PrivateAttr


class NavigationContext(BaseModel):
    """Stores the sandbox root and the current directory for a single session."""

    root: Path
    cwd: Path | None = None

    _lock: Lock = PrivateAttr(default_factory=Lock)

    def model_post_init(self, __context) -> None:
        if self.cwd is None:
            self.cwd = self.root

    @property
    def lock(self) -> Lock:
        """Serializes changes to `cwd`; only one directory change may be in flight."""
        return self._lock

    def relative(self, path: Path) -> str:
        """Path relative to the root for display, '.' for the root itself."""
        try:
            return str(path.relative_to(self.root)) or "."
        except ValueError:
            return str(path)
