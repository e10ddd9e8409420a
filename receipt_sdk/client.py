from receipt_sdk.address import AddressDeriver
from receipt_sdk.allocator import find_next_free_index
from receipt_sdk.config import DeploymentConfig
from receipt_sdk.constants import DEFAULT_ALLOCATOR_PAGE_SIZE, DEFAULT_ENUMERATOR_PAGE_SIZE
from receipt_sdk.enumerator import list_occupied_records
from receipt_sdk.pool import get_pool_aggregate, get_stake_pool
from receipt_sdk.receipts import decode_stake_deposit_receipt, summarize_receipts
from receipt_sdk.store import AccountStore, RpcAccountStore


class StakeReceiptClient():
    """
    Read-only access to one staking deployment: receipt slots, receipts and pool totals.
    Nothing here signs or submits transactions.
    """

    def __init__(self, store: AccountStore, config: DeploymentConfig, decode=decode_stake_deposit_receipt) -> None:
        self.store = store
        self.config = config
        self.deriver = AddressDeriver(config)
        self.decode = decode
        self._stake_pool_address = None

    @classmethod
    def from_endpoint(cls, endpoint, config: DeploymentConfig, decode=decode_stake_deposit_receipt, **kwargs):
        return cls(RpcAccountStore.from_endpoint(endpoint, **kwargs), config, decode=decode)

    @property
    def stake_pool_address(self):
        if self._stake_pool_address is None:
            self._stake_pool_address = self.deriver.derive_pool_address()
        return self._stake_pool_address

    def get_pool(self, pool=None):
        return pool if pool is not None else self.stake_pool_address

    def get_pool_resources(self, pool=None):
        return self.deriver.derive_pool_resources(self.get_pool(pool))

    def get_receipt_address(self, owner, index: int, pool=None):
        return self.deriver.derive_receipt_address(owner, self.get_pool(pool), index)

    def find_next_free_index(self, owner, pool=None, page_size=DEFAULT_ALLOCATOR_PAGE_SIZE) -> int:
        return find_next_free_index(self.store, self.deriver, owner, self.get_pool(pool), page_size=page_size)

    def list_receipts(self, owner, pool=None, page_size=DEFAULT_ENUMERATOR_PAGE_SIZE) -> list:
        return list_occupied_records(self.store, self.deriver, owner, self.get_pool(pool), page_size=page_size, decode=self.decode)

    def get_stake_pool(self, pool=None):
        return get_stake_pool(self.store, self.get_pool(pool))

    def get_pool_aggregate(self, pool=None):
        return get_pool_aggregate(self.store, self.deriver, self.get_pool(pool))

    def get_user_stake_summary(self, owner, pool=None, current_timestamp=None):
        records = self.list_receipts(owner, pool=pool)
        return summarize_receipts(records, current_timestamp=current_timestamp, decimals=self.config.token_decimals)
