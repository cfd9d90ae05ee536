"""Token ledger service."""

from coin_maker.services.token_ledger.token_ledger import TokenLedger

__all__ = ["TokenLedger"]
