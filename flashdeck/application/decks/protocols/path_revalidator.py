"""Protocol for signalling that rendered views are stale."""

from typing import Protocol


class PathRevalidatorProtocol(Protocol):
    """Receives the view paths a successful mutation made stale."""

    def revalidate(self, *paths: str) -> None: ...
