# src/docflow/core/engine/cancellation.py
"""
Token de cancelamento cooperativo.

O token é criado pelo chamador, passado explicitamente para
`Executor.run` e repassado a cada tool adapter. O Executor consulta o
token entre nós; adapters de longa duração devem consultá-lo
periodicamente (ou chamar `raise_if_cancelled`).

Limites explícitos:
    - Não interrompe preemptivamente um adapter em execução
    - Não é compartilhado implicitamente entre runs
"""

from __future__ import annotations

from typing import Optional

from docflow.core.exceptions import OperationCancelled


class CancellationToken:
    """Flag de cancelamento cooperativo de uma run."""

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        # Cancelar duas vezes mantém o primeiro motivo.
        if not self._cancelled:
            self._cancelled = True
            self._reason = reason

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise OperationCancelled(
                message=self._reason or "Operation cancelled",
                details={"reason": self._reason},
            )

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled!r})"
