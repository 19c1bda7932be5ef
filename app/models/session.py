"""Session state shared by one orchestrator and the services it drives."""

from dataclasses import dataclass


@dataclass
class SessionContext:
    """Viewer identity and property count as of the last sync cycle.

    ``viewer`` is resolved once per session; ``count`` is a snapshot that only
    changes when the orchestrator re-fetches it.
    """

    viewer: str | None = None
    count: int = 0

    @property
    def has_viewer(self) -> bool:
        return self.viewer is not None
