# app/core/blacklist.py
"""Blacklist de access tokens revogados (logout / logout-all).

Fica em memória do processo: NÃO é compartilhada entre instâncias. Para
escalar horizontalmente, basta outra implementação de ``TokenBlacklist``
(ex.: Redis com TTL) injetada via ``get_token_blacklist``.
"""
from __future__ import annotations

import threading
from typing import Dict, Protocol

from app.core.config import settings


class TokenBlacklist(Protocol):
    def add(self, token: str) -> None: ...

    def contains(self, token: str) -> bool: ...


class InMemoryTokenBlacklist:
    def __init__(self, max_size: int = 10_000, keep: int = 5_000):
        if keep > max_size:
            raise ValueError("keep must not exceed max_size")
        self.max_size = max_size
        self.keep = keep
        # dict preserva a ordem de inserção -> recência aproximada (não é LRU)
        self._tokens: Dict[str, None] = {}
        self._lock = threading.Lock()

    def add(self, token: str) -> None:
        with self._lock:
            self._tokens[token] = None
            if len(self._tokens) > self.max_size:
                recent = list(self._tokens)[-self.keep:]
                self._tokens = dict.fromkeys(recent)

    def contains(self, token: str) -> bool:
        with self._lock:
            return token in self._tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)

    def __contains__(self, token: str) -> bool:
        return self.contains(token)


_blacklist = InMemoryTokenBlacklist(settings.BLACKLIST_MAX_SIZE, settings.BLACKLIST_KEEP)

def get_token_blacklist() -> TokenBlacklist:
    return _blacklist
