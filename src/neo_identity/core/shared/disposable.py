"""Disposal support for manager services."""

from typing import Iterable

from ..exceptions import ObjectDisposedError


class Disposable:
    """Mixin giving services ``dispose`` and ``async with`` support.

    Subclasses list the collaborators they own in ``_owned_resources``;
    disposing the service disposes each of them once.
    """

    _disposed: bool = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _owned_resources(self) -> Iterable[object]:
        return ()

    def throw_if_disposed(self) -> None:
        if self._disposed:
            raise ObjectDisposedError(type(self).__name__)

    def dispose(self) -> None:
        """Dispose the service and the resources it owns."""
        if self._disposed:
            return
        for resource in self._owned_resources():
            dispose = getattr(resource, "dispose", None)
            if dispose is not None:
                dispose()
        self._disposed = True

    async def __aenter__(self):
        self.throw_if_disposed()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.dispose()
