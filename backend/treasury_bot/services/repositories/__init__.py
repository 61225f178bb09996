"""Repository layer - data access abstraction.

Repositories handle all database queries, providing a clean interface
for services. Services should use repositories for data access rather
than directly querying SQLAlchemy models.

Every table read here is owned by an external sync process, so
repositories expose queries only.

Dependency direction: Services -> Repositories -> Models
"""

from .account_balance_repository import AccountBalanceRepository
from .allowed_user_repository import AllowedUserRepository
from .cheque_repository import ChequeRepository
from .exceptions import DataFetchError, RepositoryError

__all__ = [
    "AccountBalanceRepository",
    "AllowedUserRepository",
    "ChequeRepository",
    "DataFetchError",
    "RepositoryError",
]
