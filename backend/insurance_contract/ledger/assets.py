"""
Fungible-asset transfer boundary.

``SessionAssetLedger`` keeps balances in the contract's own database session,
so a transfer made early in a call is undone with everything else when the
call rolls back.
"""
import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from insurance_contract.core.errors import InvalidParameterError, TransferError
from insurance_contract.models.ledger import AssetBalance

logger = logging.getLogger(__name__)


class AssetLedger(Protocol):
    async def transfer(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        ...


class SessionAssetLedger:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _account(self, asset: str, holder: str) -> AssetBalance:
        account = await self.db.get(AssetBalance, (asset, holder))
        if account is None:
            account = AssetBalance(asset=asset, holder=holder, balance=0)
            self.db.add(account)
        return account

    async def balance(self, asset: str, holder: str) -> int:
        account = await self.db.get(AssetBalance, (asset, holder))
        return account.balance if account else 0

    async def mint(self, asset: str, holder: str, amount: int) -> None:
        if amount <= 0:
            raise InvalidParameterError("Amount must be positive")
        account = await self._account(asset, holder)
        account.balance = account.balance + amount
        await self.db.flush()

    async def transfer(self, asset: str, sender: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise TransferError("Negative transfer amount")
        source = await self._account(asset, sender)
        if source.balance < amount:
            raise TransferError(
                f"Insufficient {asset} balance for {sender}: has {source.balance}, needs {amount}"
            )
        if sender == recipient:
            return
        target = await self._account(asset, recipient)
        source.balance = source.balance - amount
        target.balance = target.balance + amount
        await self.db.flush()
        logger.debug("Transferred %s %s from %s to %s", amount, asset, sender, recipient)
