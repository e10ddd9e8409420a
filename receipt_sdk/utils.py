from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from solders.pubkey import Pubkey

from receipt_sdk.constants import PUBKEY_BYTE_LENGTH, TOKEN_DECIMALS
from receipt_sdk.exceptions import DerivationError


def to_pubkey(value) -> Pubkey:
    """
    Normalize an identity given as a Pubkey, a base58 string or 32 raw bytes.
    """
    if isinstance(value, Pubkey):
        return value

    if isinstance(value, (bytes, bytearray)):
        if len(value) != PUBKEY_BYTE_LENGTH:
            raise DerivationError(f"Identity must be {PUBKEY_BYTE_LENGTH} bytes, got {len(value)}")
        return Pubkey.from_bytes(bytes(value))

    if isinstance(value, str):
        try:
            return Pubkey.from_string(value)
        except ValueError as e:
            raise DerivationError(f"Invalid identity {value!r}") from e

    raise DerivationError(f"Unsupported identity type: {type(value).__name__}")


def shorten_address(address) -> str:
    if address is None:
        return "---"
    address = str(address)
    if len(address) < 8:
        return "---"
    return address[:4] + "..." + address[-4:]


def validate_address(address) -> bool:
    """
    True for a well-formed key on the ed25519 curve, i.e. one a wallet can sign for.
    Program derived addresses are off the curve and are rejected.
    """
    try:
        pubkey = to_pubkey(address)
    except DerivationError:
        return False
    return pubkey.is_on_curve()


def to_ui_amount(raw_amount: int, decimals: int = TOKEN_DECIMALS) -> Decimal:
    return Decimal(raw_amount).scaleb(-decimals)


def from_ui_amount(amount, decimals: int = TOKEN_DECIMALS) -> int:
    try:
        amount = Decimal(str(amount))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e

    raw_amount = amount.scaleb(decimals)
    if raw_amount != raw_amount.to_integral_value():
        raise ValueError(f"{amount} has more than {decimals} decimal places")
    return int(raw_amount)


def get_current_timestamp() -> int:
    return int(datetime.now(tz=timezone.utc).timestamp())
