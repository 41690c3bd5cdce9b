from typing import Any, Iterator, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Registry(Protocol):
    """Minimal read interface a delegate must satisfy."""

    def has(self, id: str) -> bool: ...

    def get(self, id: str) -> Any: ...


class DelegateChain:
    """Ordered, append-only list of secondary registries.

    The chain holds plain references; delegates stay owned by whoever
    created them.
    """

    def __init__(self) -> None:
        self._delegates: List[Registry] = []

    def __len__(self) -> int:
        return len(self._delegates)

    def __iter__(self) -> Iterator[Registry]:
        return iter(list(self._delegates))

    def append(self, registry: Registry) -> None:
        self._delegates.append(registry)

    def find(self, id: str) -> Optional[Registry]:
        for delegate in self._delegates:
            if delegate.has(id):
                return delegate
        return None

    def has(self, id: str) -> bool:
        return self.find(id) is not None
