from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment, Confirmed

from receipt_sdk.constants import MAX_PAGE_SIZE
from receipt_sdk.exceptions import AccountNotFoundError, InvalidPageSizeError, StoreResponseError
from receipt_sdk.utils import to_pubkey


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccountLookup:
    exists: bool
    data: bytes = b""

    @classmethod
    def missing(cls):
        return cls(exists=False)


class AccountStore(ABC):
    """
    Point lookups against the chain's account space. Accounts can only be
    fetched by exact address; there is no listing.
    """

    @abstractmethod
    def get_multiple_accounts(self, addresses) -> list:
        """
        One batched lookup. Returns an AccountLookup per address, in request order.
        """

    @abstractmethod
    def get_token_balance(self, address) -> int:
        """
        Raw (integer) balance of a token account.
        """

    def get_account(self, address) -> AccountLookup:
        return self.get_multiple_accounts([address])[0]


def check_lookup_results(addresses, results):
    results = list(results)
    if len(results) != len(addresses):
        raise StoreResponseError(f"Requested {len(addresses)} accounts, store returned {len(results)}")
    return results


class RpcAccountStore(AccountStore):
    def __init__(self, client: Client, commitment: Commitment = Confirmed) -> None:
        self.client = client
        self.commitment = commitment

    @classmethod
    def from_endpoint(cls, endpoint: str, commitment: Commitment = Confirmed, timeout: float = 10):
        return cls(Client(endpoint, commitment=commitment, timeout=timeout), commitment=commitment)

    def get_multiple_accounts(self, addresses) -> list:
        pubkeys = [to_pubkey(address) for address in addresses]
        if len(pubkeys) > MAX_PAGE_SIZE:
            raise InvalidPageSizeError(f"getMultipleAccounts accepts at most {MAX_PAGE_SIZE} keys, got {len(pubkeys)}")
        if not pubkeys:
            return []

        logger.debug("getMultipleAccounts for %d keys", len(pubkeys))
        response = self.client.get_multiple_accounts(pubkeys, commitment=self.commitment)
        results = [
            AccountLookup(exists=True, data=bytes(account.data)) if account is not None else AccountLookup.missing()
            for account in response.value
        ]
        return check_lookup_results(pubkeys, results)

    def get_token_balance(self, address) -> int:
        pubkey = to_pubkey(address)
        response = self.client.get_token_account_balance(pubkey, commitment=self.commitment)
        return int(response.value.amount)

    def get_account(self, address) -> AccountLookup:
        pubkey = to_pubkey(address)
        response = self.client.get_account_info(pubkey, commitment=self.commitment)
        if response.value is None:
            return AccountLookup.missing()
        return AccountLookup(exists=True, data=bytes(response.value.data))


def fetch_required_account(store: AccountStore, address, account_name=None) -> bytes:
    lookup = store.get_account(address)
    if not lookup.exists:
        raise AccountNotFoundError(address, account_name)
    return lookup.data
