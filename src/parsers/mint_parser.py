"""SPL Token / Token-2022 mint account decoder.

Works on raw account bytes from getAccountInfo. Mint authority and
Token-2022 extensions feed both the chain and the code analyzers.
"""

import struct
from dataclasses import dataclass, field
from enum import IntEnum

import base58

# SPL Token mint layout: 82 bytes
# [0:36]   mintAuthorityOption (4) + mintAuthority (32)
# [36:44]  supply (u64)
# [44:45]  decimals (u8)
# [45:46]  isInitialized (bool)
# [46:82]  freezeAuthorityOption (4) + freezeAuthority (32)
SPL_MINT_SIZE = 82

# Token-2022 pads the mint to the token account size, then stores the
# account type byte followed by extension TLVs
TOKEN2022_ACCOUNT_TYPE_OFFSET = 165

# System program address, treated as "no authority"
NULL_ADDRESS = "11111111111111111111111111111111"


class Token2022ExtType(IntEnum):
    """Known Token-2022 extension types."""

    TRANSFER_FEE_CONFIG = 1
    TRANSFER_FEE_AMOUNT = 2
    MINT_CLOSE_AUTHORITY = 3
    CONFIDENTIAL_TRANSFER_MINT = 4
    CONFIDENTIAL_TRANSFER_ACCOUNT = 5
    DEFAULT_ACCOUNT_STATE = 6
    IMMUTABLE_OWNER = 7
    MEMO_TRANSFER = 8
    NON_TRANSFERABLE = 9
    INTEREST_BEARING_CONFIG = 10
    CPI_GUARD = 11
    PERMANENT_DELEGATE = 12
    NON_TRANSFERABLE_ACCOUNT = 13
    TRANSFER_HOOK = 14
    TRANSFER_HOOK_ACCOUNT = 15
    METADATA_POINTER = 18
    TOKEN_METADATA = 19
    GROUP_POINTER = 20
    GROUP_MEMBER_POINTER = 22


DANGEROUS_EXTENSIONS = {
    Token2022ExtType.PERMANENT_DELEGATE,
    Token2022ExtType.NON_TRANSFERABLE,
    Token2022ExtType.TRANSFER_HOOK,
}

RISKY_EXTENSIONS = {
    Token2022ExtType.TRANSFER_FEE_CONFIG,
    Token2022ExtType.DEFAULT_ACCOUNT_STATE,
}


class MintDecodeError(ValueError):
    pass


@dataclass
class MintInfo:
    """Decoded mint account."""

    supply: int = 0
    decimals: int = 0
    mint_authority: str | None = None  # None = renounced
    freeze_authority: str | None = None  # None = safe
    is_token2022: bool = False
    extensions: list[int] = field(default_factory=list)
    dangerous_extensions: list[str] = field(default_factory=list)
    risky_extensions: list[str] = field(default_factory=list)

    @property
    def mint_authority_active(self) -> bool:
        return self.mint_authority is not None

    @property
    def freeze_authority_active(self) -> bool:
        return self.freeze_authority is not None


def decode_mint(raw: bytes) -> MintInfo:
    """Decode raw mint account bytes (SPL Token or Token-2022).

    Raises MintDecodeError if the data is too short to be a mint.
    """
    if len(raw) < SPL_MINT_SIZE:
        raise MintDecodeError(f"Data too short: {len(raw)} bytes")

    mint_authority = _read_authority(raw, 0)
    supply = struct.unpack_from("<Q", raw, 36)[0]
    decimals = raw[44]
    freeze_authority = _read_authority(raw, 46)

    is_token2022 = len(raw) > SPL_MINT_SIZE
    extensions: list[int] = []
    dangerous: list[str] = []
    risky: list[str] = []

    if len(raw) > TOKEN2022_ACCOUNT_TYPE_OFFSET:
        extensions = _parse_extensions(raw[TOKEN2022_ACCOUNT_TYPE_OFFSET:])
        for ext_type in extensions:
            try:
                ext = Token2022ExtType(ext_type)
            except ValueError:
                continue  # unknown extension
            if ext in DANGEROUS_EXTENSIONS:
                dangerous.append(ext.name)
            elif ext in RISKY_EXTENSIONS:
                risky.append(ext.name)

    return MintInfo(
        supply=supply,
        decimals=decimals,
        mint_authority=mint_authority,
        freeze_authority=freeze_authority,
        is_token2022=is_token2022,
        extensions=extensions,
        dangerous_extensions=dangerous,
        risky_extensions=risky,
    )


def _read_authority(raw: bytes, offset: int) -> str | None:
    """Read a COption<Pubkey>: 4-byte tag + 32-byte key."""
    option = struct.unpack_from("<I", raw, offset)[0]
    if option != 1:
        return None
    address = base58.b58encode(raw[offset + 4:offset + 36]).decode("ascii")
    if address == NULL_ADDRESS:
        return None
    return address


def _parse_extensions(ext_data: bytes) -> list[int]:
    """Parse Token-2022 extension TLV entries.

    Layout: account type byte, then u16 type + u16 length + data per entry.
    """
    extensions: list[int] = []
    offset = 1

    while offset + 4 <= len(ext_data):
        ext_type, ext_len = struct.unpack_from("<HH", ext_data, offset)
        if ext_type == 0 and ext_len == 0:
            break

        extensions.append(ext_type)
        offset += 4 + ext_len

    return extensions
