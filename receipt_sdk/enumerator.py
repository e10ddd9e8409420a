import logging

from receipt_sdk.constants import DEFAULT_ENUMERATOR_PAGE_SIZE, MAX_SLOT_INDEX, STAKE_DEPOSIT_RECEIPT_ACCOUNT
from receipt_sdk.exceptions import AccountDecodeError, ReceiptDecodeError
from receipt_sdk.paging import paged_scan
from receipt_sdk.receipts import build_receipt_record, decode_stake_deposit_receipt
from receipt_sdk.utils import to_pubkey


logger = logging.getLogger(__name__)


def decode_page(page, decode):
    records = []
    for index, address, lookup in page.occupied_slots():
        try:
            receipt = decode(lookup.data)
        except (AccountDecodeError, ValueError) as e:
            logger.warning("Receipt at slot %d (%s) could not be decoded: %s", index, address, e)
            raise ReceiptDecodeError(f"Stored receipt does not match the {STAKE_DEPOSIT_RECEIPT_ACCOUNT} layout", address=address, index=index) from e
        records.append(build_receipt_record(address, index, receipt))
    return records


def list_occupied_records(store, deriver, owner, pool, page_size=DEFAULT_ENUMERATOR_PAGE_SIZE, decode=decode_stake_deposit_receipt, max_index=MAX_SLOT_INDEX) -> list:
    """
    Every receipt of (owner, pool), in slot order.

    Scanning stops at the first page with no receipt at all. Slots are assumed
    to be front-packed, so a receipt sitting behind `page_size` or more
    consecutive empty slots is not found.
    """
    owner = to_pubkey(owner)
    pool = to_pubkey(pool)
    records = []

    def collect(page):
        if page.is_empty:
            return True, records
        records.extend(decode_page(page, decode))
        return False, records

    paged_scan(store, deriver, owner, pool, page_size, collect, max_index=max_index)

    logger.info("Found %d receipts for owner %s in pool %s", len(records), owner, pool)
    return records
