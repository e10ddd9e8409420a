"""
Paged scanning of an owner's receipt slots.

Receipt accounts cannot be listed, only fetched by address, so a scan derives
the addresses of `page_size` consecutive slot indexes and fetches them in one
batched lookup. Pages are fetched strictly in order; each caller decides after
every page whether it is done.
"""
from dataclasses import dataclass
import logging

from receipt_sdk.constants import MAX_PAGE_SIZE, MAX_SLOT_INDEX
from receipt_sdk.exceptions import InvalidPageSizeError
from receipt_sdk.store import check_lookup_results


logger = logging.getLogger(__name__)

EXHAUSTED = object()


@dataclass(frozen=True)
class Page:
    number: int
    indexes: range
    addresses: list
    lookups: list

    @property
    def start(self):
        return self.indexes.start

    @property
    def is_empty(self):
        return not any(lookup.exists for lookup in self.lookups)

    def slots(self):
        return zip(self.indexes, self.addresses, self.lookups)

    def occupied_slots(self):
        return [(index, address, lookup) for index, address, lookup in self.slots() if lookup.exists]

    def first_free_index(self):
        for index, _address, lookup in self.slots():
            if not lookup.exists:
                return index
        return None


def check_page_size(page_size):
    if not isinstance(page_size, int) or isinstance(page_size, bool):
        raise InvalidPageSizeError(f"Page size must be an int, got {type(page_size).__name__}")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise InvalidPageSizeError(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")


def iter_pages(store, deriver, owner, pool, page_size, max_index=MAX_SLOT_INDEX):
    check_page_size(page_size)
    if not 0 <= max_index <= MAX_SLOT_INDEX:
        raise ValueError(f"max_index must be within 0..{MAX_SLOT_INDEX}")

    number = 0
    start = 0
    while start <= max_index:
        stop = min(start + page_size, max_index + 1)
        indexes = range(start, stop)
        addresses = deriver.derive_receipt_addresses(owner, pool, indexes)
        lookups = check_lookup_results(addresses, store.get_multiple_accounts(addresses))
        page = Page(number=number, indexes=indexes, addresses=addresses, lookups=lookups)
        logger.debug("Scanned page %d (slots %d..%d), %d occupied", number, start, stop - 1, sum(lookup.exists for lookup in lookups))
        yield page
        number += 1
        start = stop


def paged_scan(store, deriver, owner, pool, page_size, on_page, max_index=MAX_SLOT_INDEX):
    """
    Feed pages to `on_page` until it returns `(True, value)`, then return `value`.
    Returns EXHAUSTED if the index space ends first.
    """
    for page in iter_pages(store, deriver, owner, pool, page_size, max_index=max_index):
        done, value = on_page(page)
        if done:
            return value
    return EXHAUSTED
