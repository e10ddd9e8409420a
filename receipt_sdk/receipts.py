from dataclasses import dataclass, field
from decimal import Decimal

from solders.pubkey import Pubkey

from receipt_sdk.constants import TOKEN_DECIMALS
from receipt_sdk.exceptions import AccountDecodeError, ReceiptDecodeError
from receipt_sdk.structs import StakeDepositReceipt
from receipt_sdk.utils import get_current_timestamp, to_ui_amount


@dataclass(frozen=True)
class ReceiptRecord:
    address: Pubkey
    index: int
    owner: Pubkey
    payer: Pubkey
    stake_pool: Pubkey
    lockup_duration: int
    deposit_timestamp: int
    deposit_amount: int
    effective_stake: int
    claimed_amounts: tuple = field(default_factory=tuple)

    @property
    def unlock_timestamp(self):
        return self.deposit_timestamp + self.lockup_duration

    def is_locked(self, current_timestamp=None):
        if current_timestamp is None:
            current_timestamp = get_current_timestamp()
        return current_timestamp < self.unlock_timestamp

    def get_ui_deposit_amount(self, decimals=TOKEN_DECIMALS) -> Decimal:
        return to_ui_amount(self.deposit_amount, decimals)

    @property
    def ui_deposit_amount(self) -> Decimal:
        return self.get_ui_deposit_amount()


@dataclass(frozen=True)
class UserStakeSummary:
    receipt_count: int
    total_deposit_amount: int
    total_effective_stake: int
    locked_receipt_count: int
    decimals: int = TOKEN_DECIMALS

    @property
    def ui_total_deposit_amount(self) -> Decimal:
        return to_ui_amount(self.total_deposit_amount, self.decimals)


def decode_stake_deposit_receipt(data: bytes) -> StakeDepositReceipt:
    try:
        return StakeDepositReceipt.from_account_data(data)
    except AccountDecodeError as e:
        raise ReceiptDecodeError(str(e)) from e


def build_receipt_record(address, index, receipt) -> ReceiptRecord:
    return ReceiptRecord(
        address=address,
        index=index,
        owner=receipt.owner,
        payer=receipt.payer,
        stake_pool=receipt.stake_pool,
        lockup_duration=receipt.lockup_duration,
        deposit_timestamp=receipt.deposit_timestamp,
        deposit_amount=receipt.deposit_amount,
        effective_stake=receipt.effective_stake,
        claimed_amounts=tuple(receipt.claimed_amounts),
    )


def summarize_receipts(records, current_timestamp=None, decimals=TOKEN_DECIMALS) -> UserStakeSummary:
    if current_timestamp is None:
        current_timestamp = get_current_timestamp()

    return UserStakeSummary(
        receipt_count=len(records),
        total_deposit_amount=sum(r.deposit_amount for r in records),
        total_effective_stake=sum(r.effective_stake for r in records),
        locked_receipt_count=sum(1 for r in records if r.is_locked(current_timestamp)),
        decimals=decimals,
    )
