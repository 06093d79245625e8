
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

from typing		import Optional, Union

from .defaults		import PERSONAL_LENGTH

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
Domain-separated BLAKE2b hashing.

Each sub-protocol hashes w/ its own 16-byte BLAKE2b personalization, so that structurally similar
data hashed by two different sub-protocols can never produce confusable digests.
"""


def personalization(
    tag: Optional[Union[str,bytes]],
) -> bytes:
    """Return the BLAKE2b personalization bytes for tag (b'' if None, or an empty str).  A str tag is
    UTF-8 encoded.  Any other tag must be exactly 16 bytes (so b'' is
    rejected); we never pad or truncate a domain tag.

    """
    if tag is None or tag == "":
        return b''
    if isinstance( tag, str ):
        tag			= tag.encode( 'UTF-8' )
    if len( tag ) != PERSONAL_LENGTH:
        raise ValueError( f"BLAKE2b personalization must be {PERSONAL_LENGTH} bytes, got {len( tag )}" )
    return bytes( tag )


def blake2b(
    data: bytes,
    digest_size: int,
    tag: Optional[Union[str,bytes]] = None,
) -> bytes:
    person			= personalization( tag )  # Validate before hashing anything
    return hashlib.blake2b( bytes( data ), digest_size=digest_size, person=person ).digest()


def hash256( data: bytes, tag: Optional[Union[str,bytes]] = None ) -> bytes:
    """BLAKE2b-256, eg. for asset description hashes."""
    return blake2b( data, 32, tag )


def hash512( data: bytes, tag: Optional[Union[str,bytes]] = None ) -> bytes:
    """BLAKE2b-512, eg. for asset digests."""
    return blake2b( data, 64, tag )
