from hashlib import sha256
import unittest

from receipt_sdk.exceptions import AccountDecodeError, ReceiptDecodeError
from receipt_sdk.receipts import decode_stake_deposit_receipt
from receipt_sdk.structs import RewardPool, StakeDepositReceipt, StakePool, get_struct

from tests.constants import *


class StructTests(unittest.TestCase):

    def test_sizes(self):
        self.assertEqual(RewardPool.size, 64)
        self.assertEqual(StakeDepositReceipt.size, 8 + 32 * 3 + 8 * 3 + 16 + 16 * 10)
        self.assertEqual(StakePool.size, 8 + 32 + 16 + 32 * 3 + 64 * 10 + 8 * 4 + 1 + 1 + 6 + 8)

    def test_discriminator(self):
        self.assertEqual(StakeDepositReceipt.discriminator, sha256(b"account:StakeDepositReceipt").digest()[:8])
        self.assertEqual(bytes(StakeDepositReceipt())[:8], StakeDepositReceipt.discriminator)
        self.assertEqual(RewardPool.discriminator, b"")

    def test_get_struct_is_cached(self):
        self.assertIs(get_struct("StakePool"), StakePool)
        with self.assertRaises(KeyError):
            get_struct("Unknown")

    def test_receipt_fields(self):
        receipt = StakeDepositReceipt()
        receipt.owner = OWNER
        receipt.deposit_timestamp = -5
        receipt.deposit_amount = 2 ** 64 - 1
        receipt.effective_stake = 2 ** 100
        receipt.claimed_amounts = list(range(10))

        decoded = decode_stake_deposit_receipt(bytes(receipt))

        self.assertEqual(decoded, receipt)
        self.assertEqual(decoded.owner, OWNER)
        self.assertEqual(decoded.deposit_timestamp, -5)
        self.assertEqual(decoded.deposit_amount, 2 ** 64 - 1)
        self.assertEqual(decoded.effective_stake, 2 ** 100)
        self.assertEqual(decoded.claimed_amounts, list(range(10)))
        self.assertEqual(decoded.to_dict()["deposit_amount"], 2 ** 64 - 1)

    def test_byte_layout(self):
        receipt = StakeDepositReceipt()
        receipt.lockup_duration = 1
        receipt.deposit_amount = 0x0102

        data = bytes(receipt)
        self.assertEqual(data[8 + 96:8 + 104], b"\x01" + bytes(7))
        self.assertEqual(data[8 + 112:8 + 120], b"\x02\x01" + bytes(6))

    def test_trailing_space_is_ignored(self):
        receipt = StakeDepositReceipt()
        receipt.deposit_amount = 42

        decoded = StakeDepositReceipt.from_account_data(bytes(receipt) + bytes(16))
        self.assertEqual(decoded.deposit_amount, 42)

    def test_short_data(self):
        with self.assertRaises(AccountDecodeError):
            StakeDepositReceipt.from_account_data(bytes(StakeDepositReceipt())[:-1])

    def test_wrong_discriminator(self):
        with self.assertRaises(ReceiptDecodeError):
            decode_stake_deposit_receipt(bytes(StakePool()))

    def test_nested_structs(self):
        reward_pool = RewardPool()
        reward_pool.reward_vault = OWNER
        reward_pool.last_amount = 77

        stake_pool = StakePool()
        stake_pool.reward_pools = [reward_pool] + [RewardPool()] * 9
        stake_pool.min_duration = LOCK_PERIOD

        decoded = StakePool.from_account_data(bytes(stake_pool))
        self.assertEqual(decoded.reward_pools[0].reward_vault, OWNER)
        self.assertEqual(decoded.reward_pools[0].last_amount, 77)
        self.assertEqual(decoded.reward_pools[1].last_amount, 0)
        self.assertEqual(decoded.min_duration, LOCK_PERIOD)

    def test_unknown_field(self):
        receipt = StakeDepositReceipt()
        with self.assertRaises(AttributeError):
            receipt.amount = 1
        with self.assertRaises(AttributeError):
            receipt.amount

    def test_field_size_checks(self):
        receipt = StakeDepositReceipt()
        with self.assertRaises(ValueError):
            receipt.claimed_amounts = [1, 2]
        with self.assertRaises(OverflowError):
            receipt.deposit_amount = -1
