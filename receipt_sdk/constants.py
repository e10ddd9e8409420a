MAX_SLOT_INDEX = 4_294_967_295  # u32 max
SLOT_INDEX_BYTE_LENGTH = 4
POOL_NONCE_BYTE_LENGTH = 1

PUBKEY_BYTE_LENGTH = 32
MAX_SEED_LENGTH = 32
MAX_SEEDS = 16

DEFAULT_ALLOCATOR_PAGE_SIZE = 10
DEFAULT_ENUMERATOR_PAGE_SIZE = 50
# getMultipleAccounts accepts at most 100 keys per request.
MAX_PAGE_SIZE = 100

TOKEN_DECIMALS = 8
MAX_REWARD_POOLS = 10

STAKE_DEPOSIT_RECEIPT_TAG = b"stakeDepositReceipt"
STAKE_POOL_TAG = b"stakePool"
VAULT_TAG = b"vault"
STAKE_MINT_TAG = b"stakeMint"
REWARD_VAULT_TAG = b"rewardVault"

STAKE_DEPOSIT_RECEIPT_ACCOUNT = "StakeDepositReceipt"
STAKE_POOL_ACCOUNT = "StakePool"

DEFAULT_STAKE_MINT = "C3R65zAxLrR3B1jJ1A5x4rA3vPCHPQj2KSQ6x9wcPkW"
DEFAULT_POOL_AUTHORITY = "B4L4uRG8ocJfhSxby4UqEHgCTaNyjuUyDHuQCjeD4f4f"
DEFAULT_POOL_NONCE = 1
DEFAULT_REWARD_POOL_INDEX = 0
