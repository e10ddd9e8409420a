from dataclasses import dataclass
from decimal import Decimal
import logging

from receipt_sdk.constants import STAKE_POOL_ACCOUNT, TOKEN_DECIMALS
from receipt_sdk.exceptions import RewardVaultMismatchError
from receipt_sdk.store import fetch_required_account
from receipt_sdk.structs import StakePool
from receipt_sdk.utils import to_ui_amount


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolAggregate:
    total_staked: int
    total_reward: int
    lock_period: int
    decimals: int = TOKEN_DECIMALS

    @property
    def ui_total_staked(self) -> Decimal:
        return to_ui_amount(self.total_staked, self.decimals)

    @property
    def ui_total_reward(self) -> Decimal:
        return to_ui_amount(self.total_reward, self.decimals)


def get_stake_pool(store, address) -> StakePool:
    data = fetch_required_account(store, address, STAKE_POOL_ACCOUNT)
    return StakePool.from_account_data(data)


def get_pool_aggregate(store, deriver, pool=None) -> PoolAggregate:
    resources = deriver.derive_pool_resources(pool)
    stake_pool = get_stake_pool(store, resources.stake_pool)

    reward_pool_index = deriver.config.reward_pool_index
    reward_vault = stake_pool.reward_pools[reward_pool_index].reward_vault
    if reward_vault != resources.reward_vault:
        logger.warning("Reward pool %d of %s does not use the derived reward vault", reward_pool_index, resources.stake_pool)
        raise RewardVaultMismatchError(resources.stake_pool, reward_pool_index, resources.reward_vault, reward_vault)

    aggregate = PoolAggregate(
        total_staked=store.get_token_balance(resources.vault),
        total_reward=store.get_token_balance(resources.reward_vault),
        lock_period=stake_pool.min_duration,
        decimals=deriver.config.token_decimals,
    )
    logger.debug("Pool %s: staked=%d reward=%d lock_period=%d", resources.stake_pool, aggregate.total_staked, aggregate.total_reward, aggregate.lock_period)
    return aggregate
