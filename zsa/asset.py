
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
from __future__		import annotations

import hashlib

from collections	import namedtuple
from typing		import Union

from .defaults		import (
    ASSET_DESC_PERSONAL, ASSET_DIGEST_PERSONAL, ASSET_BASE_DOMAIN, ASSET_ID_VERSION,
    ASSET_DESC_SEPARATOR,
)
from .hashing		import hash256, hash512
from .keys		import decode_issuer
from .util		import into_bytes

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

#
# ZIP-227 Asset Identifiers
#
#     asset_desc_hash	= BLAKE2b-256( "ZSA-AssetDescCRH", asset_desc )
#     AssetId		= 0x00 || ik || asset_desc_hash				(65 bytes)
#     asset_digest	= BLAKE2b-512( "ZSA-Asset-Digest", encode_asset_id( AssetId ))
#     asset_base	= SHA-256( "z.cash:OrchardZSA" || asset_digest )
#
# The asset_base is a simplified stand-in for the GroupHash onto the Pallas curve.
#
AssetId = namedtuple( 'AssetId', ('asset_id', 'issuer', 'asset_desc_hash') )
AssetDescription = namedtuple( 'AssetDescription', ('name', 'symbol', 'description') )


def compute_asset_desc_hash( asset_desc: str ) -> bytes:
    return hash256( asset_desc.encode( 'UTF-8' ), ASSET_DESC_PERSONAL )


def compute_asset_id(
    issuer: Union[str,bytes],
    asset_desc: str,
) -> AssetId:
    """Compute the hex AssetId for the issuer and asset description.  The issuer may be the 66-hex
    encoded issuer identifier, or the raw 32-byte (64-hex) validating key; the AssetId binds only
    the key itself, so is always exactly 65 bytes.

    """
    ik				= decode_issuer( issuer )
    asset_desc_hash		= compute_asset_desc_hash( asset_desc )
    asset_id			= ASSET_ID_VERSION + ik + asset_desc_hash
    assert len( asset_id ) == 65, \
        f"AssetId must be 65 bytes, not {len( asset_id )}"
    return AssetId(
        asset_id	= asset_id.hex(),
        issuer		= issuer if isinstance( issuer, str ) else issuer.hex(),
        asset_desc_hash	= asset_desc_hash.hex(),
    )


def compute_asset_digest( asset_id: Union[str,bytes] ) -> bytes:
    return hash512( into_bytes( asset_id, what="asset id" ), ASSET_DIGEST_PERSONAL )


def compute_asset_base( asset_digest: Union[str,bytes] ) -> str:
    digest			= into_bytes( asset_digest, what="asset digest" )
    return hashlib.sha256( ASSET_BASE_DOMAIN + digest ).hexdigest()


def create_asset_description( name: str, symbol: str, description: str = "" ) -> str:
    return ASSET_DESC_SEPARATOR.join( (name, symbol, description or "") )


def parse_asset_description( asset_desc: str ) -> AssetDescription:
    """Split "name|symbol|description"; the description retains any further '|' separators."""
    parts			= asset_desc.split( ASSET_DESC_SEPARATOR )
    return AssetDescription(
        name		= parts[0],
        symbol		= parts[1] if len( parts ) > 1 else "",
        description	= ASSET_DESC_SEPARATOR.join( parts[2:] ),
    )
