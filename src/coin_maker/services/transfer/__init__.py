"""Balance transfers between addresses."""

from coin_maker.services.transfer.transfer_handler import TransferHandler

__all__ = ["TransferHandler"]
