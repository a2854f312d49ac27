from typing import Annotated

from fastapi import Depends

from flashdeck.core import Container
from flashdeck.database import DatabaseSession


def get_container(db: DatabaseSession) -> Container:
    """
    Build the dependency container for one request.

    Repositories, handlers and the path revalidator all share the request's
    database session and die with the request.
    """
    container = Container()
    container.db.override(db)
    return container


RequestContainer = Annotated[Container, Depends(get_container)]
