import logging
from typing import Any, Iterable, Optional, Protocol, Type, TypeVar

from tortoise.models import Model
from tortoise.transactions import in_transaction

log = logging.getLogger(__name__)

M = TypeVar("M", bound=Model)


class UnitOfWork(Protocol):
    """
    A scope in which several persistence operations commit or roll back together.

    Callers drive it explicitly: begin, then any number of find_one/create/save,
    then commit or rollback, and finally dispose.
    """

    async def begin(self) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def dispose(self) -> None: ...

    async def find_one(self, model: Type[M], prefetch: Iterable[str] = (), **filters) -> Optional[M]: ...

    async def create(self, model: Type[M], **fields) -> M: ...

    async def save(self, instance: Any) -> None: ...


class _Rollback(Exception):
    """Handed to the transaction context to make it roll back."""


class TortoiseUnitOfWork:
    """UnitOfWork backed by a Tortoise `in_transaction()` context."""

    def __init__(self, connection_name: Optional[str] = None):
        self.connection_name = connection_name
        self._context = None
        self.connection = None

    async def begin(self) -> None:
        if self._context is not None:
            raise RuntimeError("Unit of work already started.")
        self._context = in_transaction(self.connection_name)
        self.connection = await self._context.__aenter__()

    async def commit(self) -> None:
        context = self._finish()
        await context.__aexit__(None, None, None)

    async def rollback(self) -> None:
        if self._context is None:
            return
        context = self._finish()
        await context.__aexit__(_Rollback, _Rollback(), None)

    async def dispose(self) -> None:
        # A transaction still open here was neither committed nor rolled back
        if self._context is not None:
            log.warning("Unit of work disposed while open; rolling back.")
            await self.rollback()

    def _finish(self):
        if self._context is None:
            raise RuntimeError("Unit of work is not active.")
        context, self._context, self.connection = self._context, None, None
        return context

    async def find_one(self, model, prefetch=(), **filters):
        query = model.filter(**filters).using_db(self.connection)
        if prefetch:
            query = query.prefetch_related(*prefetch)
        return await query.first()

    async def create(self, model, **fields):
        return await model.create(using_db=self.connection, **fields)

    async def save(self, instance) -> None:
        await instance.save(using_db=self.connection)
