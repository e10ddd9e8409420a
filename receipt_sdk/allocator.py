import logging

from receipt_sdk.constants import DEFAULT_ALLOCATOR_PAGE_SIZE, MAX_SLOT_INDEX
from receipt_sdk.exceptions import AllocationExhaustedError
from receipt_sdk.paging import EXHAUSTED, paged_scan
from receipt_sdk.utils import to_pubkey


logger = logging.getLogger(__name__)


def first_free_slot(page):
    index = page.first_free_index()
    return index is not None, index


def find_next_free_index(store, deriver, owner, pool, page_size=DEFAULT_ALLOCATOR_PAGE_SIZE, max_index=MAX_SLOT_INDEX) -> int:
    """
    Smallest slot index with no receipt account for (owner, pool).

    A vacated slot is reused before any never-used slot above it. The answer is
    only a hint: the deposit instruction creates the receipt conditionally and
    fails if another deposit took the slot first.
    """
    owner = to_pubkey(owner)
    pool = to_pubkey(pool)

    index = paged_scan(store, deriver, owner, pool, page_size, first_free_slot, max_index=max_index)
    if index is EXHAUSTED:
        logger.warning("Every receipt slot up to %d is occupied for owner %s in pool %s", max_index, owner, pool)
        raise AllocationExhaustedError(owner, pool, max_index)

    logger.info("Next free receipt slot for owner %s in pool %s is %d", owner, pool, index)
    return index
