
#
# Python-zsa -- Zcash Shielded Asset Issuance Keys and Asset Identifiers
#
# Copyright (c) 2025, Dominion Research & Development Corp.
#
# Python-zsa is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.  It is also available under alternative (eg. Commercial) licenses, at
# your option.  See the LICENSE file at the top of the source tree.
#
# Python-zsa is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
#

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

#
# ZIP-227 Issuance Key Derivation (ZIP-32 style, hardened only)
#
#     m_Issuance / purpose' / coin_type' / account'
#
# The master key is HMAC-SHA512 keyed w/ the MKG domain; each child is HMAC-SHA512 keyed w/ the
# parent chain code, over 0x00 || parent key || index (big-endian).
#
SEED_LENGTH			= 32
SEED_LENGTHS			= (32, 252)	# Inclusive range of supported seed lengths, in bytes

MKG_DOMAIN			= b"ZcashSA_Issue_V1"
SIG_DOMAIN			= b"ZcashSA_Issue_V1_Sig"

HARDENED			= 0x80000000
PURPOSE				= 227		# 0xE3
COIN_TYPE			= 133		# Zcash, per ZIP-32
ACCOUNT				= 0

RETRY_LIMIT			= 2**32 - 1	# The retry counter occupies the 4-byte index field

#
# Issuer and Asset encodings
#
ISSUER_VERSION			= b"\x00"	# ik_encoding prefix
ASSET_ID_VERSION		= b"\x00"	# encode_asset_id prefix

ASSET_DESC_PERSONAL		= "ZSA-AssetDescCRH"
ASSET_DIGEST_PERSONAL		= "ZSA-Asset-Digest"
ASSET_BASE_DOMAIN		= b"z.cash:OrchardZSA"
PERSONAL_LENGTH			= 16		# BLAKE2b personalization is exactly 16 bytes

ASSET_DESC_SEPARATOR		= "|"

#
# Issuance Transactions
#
TX_VERSION			= 6		# ZIP-227 requires v6 transactions
MAX_ISSUE			= 2**64 - 1
SYMBOL_LENGTH			= (2, 10)	# Inclusive; enforced for token data, not by the hashes
NETWORK				= "zcash-testnet"

#
# Persisted Issuance Keys
#
KEYS_FILE			= "~/.zsa/issuance-keys.json"
KEYS_ENVVAR			= "ZSA_KEYS"

#
# SLIP-39 Seed Backup
#
GROUP_REQUIRED_RATIO		= 1/2   # default to 1/2 of group members, rounded up
GROUP_THRESHOLD_RATIO		= 1/2   # default to 1/2 of groups, rounded up
GROUPS				= [
    "Issuer1",
    "Backup2/3",
]
