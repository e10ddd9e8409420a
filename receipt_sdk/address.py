from dataclasses import dataclass

from solders.pubkey import Pubkey

from receipt_sdk.config import DeploymentConfig
from receipt_sdk.constants import *
from receipt_sdk.exceptions import DerivationError
from receipt_sdk.utils import to_pubkey


@dataclass(frozen=True)
class PoolResources:
    stake_pool: Pubkey
    vault: Pubkey
    stake_mint: Pubkey
    reward_vault: Pubkey


def derive_address(seeds, program_id) -> Pubkey:
    if len(seeds) > MAX_SEEDS:
        raise DerivationError(f"At most {MAX_SEEDS} seeds are allowed, got {len(seeds)}")

    for seed in seeds:
        if not isinstance(seed, (bytes, bytearray)):
            raise DerivationError(f"Seeds must be bytes, got {type(seed).__name__}")
        if len(seed) > MAX_SEED_LENGTH:
            raise DerivationError(f"Seed is {len(seed)} bytes, the limit is {MAX_SEED_LENGTH}")

    program_id = to_pubkey(program_id)
    try:
        address, _bump = Pubkey.find_program_address([bytes(seed) for seed in seeds], program_id)
    except Exception as e:
        raise DerivationError(f"No program address for seeds under {program_id}") from e
    return address


def encode_slot_index(index: int) -> bytes:
    if not isinstance(index, int) or isinstance(index, bool):
        raise DerivationError(f"Slot index must be an int, got {type(index).__name__}")
    if not 0 <= index <= MAX_SLOT_INDEX:
        raise DerivationError(f"Slot index {index} is outside 0..{MAX_SLOT_INDEX}")
    return index.to_bytes(SLOT_INDEX_BYTE_LENGTH, "little")


class AddressDeriver():
    def __init__(self, config: DeploymentConfig) -> None:
        self.config = config

    @property
    def program_id(self):
        return self.config.program_id

    def derive(self, *seeds) -> Pubkey:
        return derive_address(list(seeds), self.config.program_id)

    def derive_receipt_address(self, owner, pool, index: int) -> Pubkey:
        return self.derive(
            bytes(to_pubkey(owner)),
            bytes(to_pubkey(pool)),
            encode_slot_index(index),
            self.config.receipt_tag,
        )

    def derive_receipt_addresses(self, owner, pool, indexes):
        owner_seed = bytes(to_pubkey(owner))
        pool_seed = bytes(to_pubkey(pool))
        return [
            self.derive(owner_seed, pool_seed, encode_slot_index(index), self.config.receipt_tag)
            for index in indexes
        ]

    def derive_pool_address(self) -> Pubkey:
        return self.derive(
            self.config.pool_nonce.to_bytes(POOL_NONCE_BYTE_LENGTH, "little"),
            bytes(self.config.stake_mint),
            bytes(self.config.pool_authority),
            self.config.pool_tag,
        )

    def derive_pool_resources(self, pool=None) -> PoolResources:
        pool = to_pubkey(pool) if pool is not None else self.derive_pool_address()
        pool_seed = bytes(pool)
        return PoolResources(
            stake_pool=pool,
            vault=self.derive(pool_seed, self.config.vault_tag),
            stake_mint=self.derive(pool_seed, self.config.stake_mint_tag),
            reward_vault=self.derive(pool_seed, bytes(self.config.reward_mint), self.config.reward_vault_tag),
        )
