"""BaseService — foundation for ledgerctl services.

Every service receives the :class:`Ledger` it operates on at construction
time.  Services translate :class:`LedgerError` into failed
:class:`ServiceResult` values so the interface layer never sees raw
domain exceptions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ledgerctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from ledgerctl.domain.errors import LedgerError
    from ledgerctl.infrastructure.ledger import Ledger

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class AccountService(BaseService):
            def create_account(self, ...) -> ServiceResult:
                try:
                    account = self._ledger.create(...)
                except LedgerError as exc:
                    return self._failed("create_account", exc)
                ...
    """

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    def _failed(self, op: str, exc: LedgerError) -> ServiceResult:
        """Turn a recovered ledger error into a failed result."""
        logger.debug("%s rejected: %s (%s)", op, exc.code, exc.message)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail),
        )
