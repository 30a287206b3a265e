# swimschool/services/confirm.py
"""
Confirmação em dois cliques para decisões de pagamento.

Isto é um debounce por sessão de cliente, não um lock: só impede que um clique
acidental do mesmo admin aplique a decisão. Dois admins diferentes ainda podem
decidir a mesma inscrição ao mesmo tempo (último a gravar vence).
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Hashable, Optional

from swimschool.core.config import settings

class ConfirmGate:
    def __init__(self, window_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.window_seconds = settings.PAYMENT_CONFIRM_WINDOW_SECONDS if window_seconds is None else window_seconds
        self.clock = clock
        self._lock = threading.Lock()
        self._pending: Dict[Hashable, float] = {}

    def _expire(self, now: float) -> None:
        stale = [k for k, at in self._pending.items() if now - at > self.window_seconds]
        for k in stale:
            del self._pending[k]

    def request(self, key: Hashable) -> bool:
        """
        True quando este clique confirma uma intenção anterior ainda válida.

        Primeiro clique (ou clique depois da janela) registra a intenção e
        devolve False; o segundo dentro da janela consome a intenção.
        """
        now = self.clock()
        with self._lock:
            self._expire(now)
            if key in self._pending:
                del self._pending[key]
                return True
            self._pending[key] = now
            return False

    def cancel(self, key: Hashable) -> None:
        with self._lock:
            self._pending.pop(key, None)

    def pending(self, key: Hashable) -> bool:
        with self._lock:
            self._expire(self.clock())
            return key in self._pending

confirm_gate = ConfirmGate()
