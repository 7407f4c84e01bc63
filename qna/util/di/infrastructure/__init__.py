"""Infrastructure DI providers."""

from qna.util.di.infrastructure.notification import ProdNotificationProvider
from qna.util.di.infrastructure.persistence import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

__all__ = [
    "PersistenceProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
