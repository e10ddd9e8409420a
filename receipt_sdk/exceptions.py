class ReceiptSDKError(Exception):
    pass


class DerivationError(ReceiptSDKError, ValueError):
    """An identity, index or seed could not be turned into a program address."""


class AllocationExhaustedError(ReceiptSDKError):
    def __init__(self, owner, pool, max_index):
        self.owner = owner
        self.pool = pool
        self.max_index = max_index
        super().__init__(f"No free receipt slot for owner {owner} in pool {pool} (scanned 0..{max_index})")


class AccountDecodeError(ReceiptSDKError):
    pass


class ReceiptDecodeError(AccountDecodeError):
    def __init__(self, message, address=None, index=None):
        self.address = address
        self.index = index
        if address is not None:
            message = f"{message} (address={address}, index={index})"
        super().__init__(message)


class AccountNotFoundError(ReceiptSDKError):
    def __init__(self, address, account_name=None):
        self.address = address
        self.account_name = account_name
        super().__init__(f"{account_name or 'Account'} not found at {address}")


class InvalidPageSizeError(ReceiptSDKError, ValueError):
    pass


class StoreResponseError(ReceiptSDKError):
    pass


class RewardVaultMismatchError(ReceiptSDKError):
    def __init__(self, stake_pool, reward_pool_index, expected, actual):
        self.stake_pool = stake_pool
        self.reward_pool_index = reward_pool_index
        self.expected = expected
        self.actual = actual
        super().__init__(f"Reward pool {reward_pool_index} of {stake_pool} pays from {actual}, expected {expected}")
