# -*- coding: utf-8 -*-
"""Observable screen state."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

StoreListener = Callable[[Dict[str, Any]], None]


class Store:
    """Flat state dict; ``set`` merges and then notifies every listener."""

    def __init__(self, **initial: Any) -> None:
        self._state: Dict[str, Any] = dict(initial)
        self._listeners: List[StoreListener] = []

    @property
    def state(self) -> Dict[str, Any]:
        return dict(self._state)

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def set(self, **changes: Any) -> None:
        self._state.update(changes)
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
