"""Request-scoped cache invalidation signal."""

import structlog

logger = structlog.get_logger(__name__)

INVALIDATED_PATHS_HEADER = "X-Invalidated-Paths"


class RequestPathRevalidator:
    """
    Collects the view paths made stale during one request.

    The HTTP layer reports them to the client in the ``X-Invalidated-Paths``
    response header; pages themselves are never cached.
    """

    def __init__(self) -> None:
        self._paths: list[str] = []

    def revalidate(self, *paths: str) -> None:
        """Mark paths as stale."""
        for path in paths:
            if path not in self._paths:
                self._paths.append(path)
        logger.debug("paths_revalidated", paths=list(paths))

    @property
    def paths(self) -> list[str]:
        return list(self._paths)

    def header_value(self) -> str:
        return ", ".join(self._paths)
