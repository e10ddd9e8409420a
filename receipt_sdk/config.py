from dataclasses import dataclass, fields

from solders.pubkey import Pubkey

from receipt_sdk.constants import *
from receipt_sdk.utils import to_pubkey


PUBKEY_FIELDS = ("program_id", "stake_mint", "pool_authority", "reward_mint")
TAG_FIELDS = ("receipt_tag", "pool_tag", "vault_tag", "stake_mint_tag", "reward_vault_tag")


@dataclass(frozen=True)
class DeploymentConfig:
    """
    Everything that pins the SDK to one deployment of the staking program:
    program identity, the stake pool's creation seeds and the fixed seed tags.
    """
    program_id: Pubkey
    stake_mint: Pubkey
    pool_authority: Pubkey
    pool_nonce: int = DEFAULT_POOL_NONCE
    # Rewards are paid in the stake token unless configured otherwise.
    reward_mint: Pubkey = None
    reward_pool_index: int = DEFAULT_REWARD_POOL_INDEX
    token_decimals: int = TOKEN_DECIMALS

    receipt_tag: bytes = STAKE_DEPOSIT_RECEIPT_TAG
    pool_tag: bytes = STAKE_POOL_TAG
    vault_tag: bytes = VAULT_TAG
    stake_mint_tag: bytes = STAKE_MINT_TAG
    reward_vault_tag: bytes = REWARD_VAULT_TAG

    def __post_init__(self):
        for name in PUBKEY_FIELDS:
            value = getattr(self, name)
            if name == "reward_mint" and value is None:
                value = self.stake_mint
            object.__setattr__(self, name, to_pubkey(value))

        for name in TAG_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str):
                object.__setattr__(self, name, value.encode("utf-8"))

        if not 0 <= self.pool_nonce <= 255:
            raise ValueError(f"pool_nonce must fit in one byte, got {self.pool_nonce}")

        if not 0 <= self.reward_pool_index < MAX_REWARD_POOLS:
            raise ValueError(f"reward_pool_index must be below {MAX_REWARD_POOLS}, got {self.reward_pool_index}")

    @classmethod
    def from_dict(cls, data: dict):
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown deployment config keys: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in PUBKEY_FIELDS:
                value = str(value)
            elif f.name in TAG_FIELDS:
                value = value.decode("utf-8")
            result[f.name] = value
        return result
