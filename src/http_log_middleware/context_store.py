# context_store.py

import logging
import uuid

from aiocache import Cache

from .exceptions import DuplicateTransactionError
from .models import RequestRecord
from .models import TransactionContext

logger = logging.getLogger("http_log_middleware.context_store")


class ContextStore:
    """
    Abstract interface for live transaction contexts.

    Every context created here must be retired by the response or error
    hook. A transaction whose hooks never complete keeps its context for
    the lifetime of the store.
    """

    async def create(
        self, transaction_id: str, request: RequestRecord
    ) -> TransactionContext:
        """Start a context, raising DuplicateTransactionError if the id is live"""
        raise NotImplementedError

    async def get(self, transaction_id: str) -> TransactionContext | None:
        raise NotImplementedError

    async def retire(self, transaction_id: str):
        """Forget a context. Retiring an unknown id is a no-op"""
        raise NotImplementedError


class MemoryContextStore(ContextStore):
    """
    In-process store backed by an aiocache memory cache.

    Each store gets its own namespace, so two middlewares never see each
    other's transactions. Contexts are stored by reference and never expire.
    """

    def __init__(self):
        self._cache = Cache(Cache.MEMORY, namespace=f"tx:{uuid.uuid4().hex}:")

    async def create(
        self, transaction_id: str, request: RequestRecord
    ) -> TransactionContext:
        context = TransactionContext(transaction_id=transaction_id, request=request)
        try:
            await self._cache.add(transaction_id, context)
        except ValueError as e:
            raise DuplicateTransactionError(transaction_id) from e
        logger.debug(f"Created context for transaction {transaction_id}")
        return context

    async def get(self, transaction_id: str) -> TransactionContext | None:
        return await self._cache.get(transaction_id)

    async def retire(self, transaction_id: str):
        if await self._cache.delete(transaction_id):
            logger.debug(f"Retired context for transaction {transaction_id}")
