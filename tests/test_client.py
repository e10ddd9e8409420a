from decimal import Decimal
import unittest

from solders.pubkey import Pubkey

from receipt_sdk.client import StakeReceiptClient
from receipt_sdk.config import DeploymentConfig
from receipt_sdk.constants import DEFAULT_POOL_AUTHORITY, DEFAULT_STAKE_MINT
from receipt_sdk.receipts import UserStakeSummary, summarize_receipts
from receipt_sdk.store import RpcAccountStore
from receipt_sdk.utils import from_ui_amount, shorten_address, to_ui_amount, validate_address

from tests.constants import *
from tests.core import BaseTestCase


class UserStakeSummaryTests(BaseTestCase):

    def test_summary(self):
        self.simulate_receipt(0, deposit_amount=100_000_000, deposit_timestamp=MAY_1)
        self.simulate_receipt(1, deposit_amount=50_000_000, deposit_timestamp=MAY_1 + 10 * DAY)

        summary = self.client.get_user_stake_summary(self.owner, current_timestamp=MAY_1 + LOCK_PERIOD)

        self.assertEqual(summary, UserStakeSummary(
            receipt_count=2,
            total_deposit_amount=150_000_000,
            total_effective_stake=300_000_000,
            locked_receipt_count=1,
        ))
        self.assertEqual(summary.ui_total_deposit_amount, Decimal("1.5"))

    def test_empty_summary(self):
        summary = summarize_receipts([], current_timestamp=MAY_1)
        self.assertEqual(summary.receipt_count, 0)
        self.assertEqual(summary.total_deposit_amount, 0)

    def test_stake_pool_address_is_derived_once(self):
        self.assertEqual(self.client.stake_pool_address, self.pool)
        self.assertIs(self.client.stake_pool_address, self.client.stake_pool_address)

    def test_from_endpoint(self):
        def decode(data):
            return None

        client = StakeReceiptClient.from_endpoint("http://127.0.0.1:8899", self.config, decode=decode, timeout=3)

        self.assertIsInstance(client.store, RpcAccountStore)
        self.assertIs(client.decode, decode)
        self.assertEqual(client.config, self.config)


class DeploymentConfigTests(unittest.TestCase):

    def test_round_trip_through_dict(self):
        config = DeploymentConfig(program_id=PROGRAM_ID, stake_mint=STAKE_MINT, pool_authority=POOL_AUTHORITY, pool_nonce=3)
        data = config.to_dict()

        self.assertEqual(data["program_id"], str(PROGRAM_ID))
        self.assertEqual(data["reward_mint"], str(STAKE_MINT))
        self.assertEqual(data["receipt_tag"], "stakeDepositReceipt")
        self.assertEqual(DeploymentConfig.from_dict(data), config)

    def test_base58_identities(self):
        config = DeploymentConfig(program_id=str(PROGRAM_ID), stake_mint=DEFAULT_STAKE_MINT, pool_authority=DEFAULT_POOL_AUTHORITY)
        self.assertEqual(config.program_id, PROGRAM_ID)
        self.assertEqual(str(config.stake_mint), DEFAULT_STAKE_MINT)
        self.assertEqual(config.reward_mint, config.stake_mint)

    def test_immutable(self):
        config = DeploymentConfig(program_id=PROGRAM_ID, stake_mint=STAKE_MINT, pool_authority=POOL_AUTHORITY)
        with self.assertRaises(AttributeError):
            config.pool_nonce = 2

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            DeploymentConfig(program_id=PROGRAM_ID, stake_mint=STAKE_MINT, pool_authority=POOL_AUTHORITY, pool_nonce=256)
        with self.assertRaises(ValueError):
            DeploymentConfig(program_id=PROGRAM_ID, stake_mint=STAKE_MINT, pool_authority=POOL_AUTHORITY, reward_pool_index=10)
        with self.assertRaises(ValueError):
            DeploymentConfig(program_id=bytes(5), stake_mint=STAKE_MINT, pool_authority=POOL_AUTHORITY)
        with self.assertRaises(ValueError):
            DeploymentConfig.from_dict({"program_id": str(PROGRAM_ID), "stake_mint": str(STAKE_MINT), "pool_authority": str(POOL_AUTHORITY), "admin": "x"})


class UtilsTests(unittest.TestCase):

    def test_shorten_address(self):
        self.assertEqual(shorten_address(DEFAULT_STAKE_MINT), "C3R6...cPkW")
        self.assertEqual(shorten_address(None), "---")
        self.assertEqual(shorten_address("abc"), "---")

    def test_validate_address(self):
        self.assertFalse(validate_address("not an address"))
        self.assertFalse(validate_address(bytes(3)))
        self.assertTrue(validate_address(Pubkey.from_bytes(bytes([1]) + bytes(31))))

    def test_ui_amounts(self):
        self.assertEqual(to_ui_amount(123_456_789), Decimal("1.23456789"))
        self.assertEqual(to_ui_amount(5, decimals=2), Decimal("0.05"))
        self.assertEqual(from_ui_amount("1.5"), 150_000_000)
        self.assertEqual(from_ui_amount(Decimal("0.00000001")), 1)

        with self.assertRaises(ValueError):
            from_ui_amount("0.000000001")
        with self.assertRaises(ValueError):
            from_ui_amount("abc")
