"""Single-flight: una sola carga en vuelo por clave de fuente.

Si llega una segunda petición mientras la primera carga sigue en curso, ambas
esperan el mismo `asyncio.Task`. Un resultado exitoso queda memoizado para
toda la vida del objeto; un fallo se propaga a todos los que esperaban y
libera la clave, así que el siguiente intento vuelve a cargar.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    def __init__(self) -> None:
        self._tasks: dict[Any, asyncio.Task[T]] = {}
        # resultados fuera de cualquier event loop: sirven desde otro asyncio.run
        self._results: dict[Any, T] = {}

    def is_done(self, key: Any) -> bool:
        return key in self._results

    def seed(self, key: Any, value: T) -> None:
        """Marca la clave como ya cargada (datos construidos en memoria)."""

        self._tasks.pop(key, None)
        self._results[key] = value

    async def run(self, key: Any, factory: Callable[[], Awaitable[T]]) -> T:
        if key in self._results:
            return self._results[key]

        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(factory())
            task.add_done_callback(lambda t: self._settle(key, t))
            self._tasks[key] = task
        # shield: cancelar a un waiter no cancela la carga compartida
        return await asyncio.shield(task)

    def _settle(self, key: Any, task: asyncio.Task[T]) -> None:
        if self._tasks.get(key) is not task:
            return
        del self._tasks[key]
        if not task.cancelled() and task.exception() is None:
            self._results[key] = task.result()
