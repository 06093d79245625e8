
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

import logging
import math
import re

from typing		import Dict, List, Optional, Sequence, Tuple, Union

import shamir_mnemonic

from .defaults		import GROUPS, GROUP_REQUIRED_RATIO, GROUP_THRESHOLD_RATIO, SEED_LENGTHS
from .util		import commas, into_bytes

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )

#
# SLIP-39 Backup of the Issuance Seed
#
#     The issuer identity is entirely determined by its seed, so the seed alone need be backed up.
# We split it into SLIP-39 groups of mnemonics; recovering the seed from a threshold of groups
# re-derives the identical issuer (and hence the identical AssetIds).
#
#     SLIP-39 requires a master secret of an even number of bytes, so odd-length seeds (supported
# by the issuance key derivation) cannot be backed up this way.
#


def group_parser( group_spec ):
    """Parse a SLIP-39 group specification.

        Backup3, Backup 3, Backup(3)	- A 2/3 group (default is 1/2 of group size, rounded up)
        Backup2/3, Backup(2/3)		- A 2/3 group

    """
    match			= group_parser.RE.match( group_spec )
    if not match:
        raise ValueError( f"Invalid group specification: {group_spec!r}" )
    name			= match.group( 'name' ).strip()
    size			= match.group( 'size' )
    require			= match.group( 'require' )
    if not size:
        size			= 1
    if not require:
        require			= math.ceil( int( size ) * GROUP_REQUIRED_RATIO )
    return name,(int(require),int(size))
group_parser.RE			= re.compile( # noqa E305
    r"""^
        \s*
        (?P<name> [^\d\(/]+ )
        \s*\(?\s*
        (?: (?P<require> \d* ) \s* / )?
        \s*
        (?P<size> \d* )
        \s*\)?\s*
        $""", re.VERBOSE )


def backup_mnemonics(
    seed: Union[bytes,str],
    group_threshold: Optional[int] = None,		# Default: 1/2 of groups, rounded up
    groups: Optional[Sequence[str]] = None,		# Default: see defaults.GROUPS
    passphrase: Optional[Union[bytes,str]] = None,
    iteration_exponent: int	= 1,
) -> Dict[str, Tuple[int, List[str]]]:
    """Split the issuance seed into SLIP-39 mnemonics, returning { <name>: (<required>, [<mnemonic>, ...]), ... }
    for each group.

    """
    seed			= into_bytes( seed, what="seed" )
    lo,hi			= SEED_LENGTHS
    if not lo <= len( seed ) <= hi or len( seed ) % 2:
        raise ValueError( f"Only even seed lengths between {lo} and {hi} bytes may be backed up; not {len( seed )} bytes" )
    g_names,g_dims		= zip( *map( group_parser, groups or GROUPS ))
    if not group_threshold:
        group_threshold		= math.ceil( len( g_names ) * GROUP_THRESHOLD_RATIO )
    if not 0 < group_threshold <= len( g_names ):
        raise ValueError( f"Group threshold {group_threshold} must be between 1 and {len( g_names )}" )
    if isinstance( passphrase, str ):
        passphrase		= passphrase.encode( 'UTF-8' )
    mnems			= shamir_mnemonic.generate_mnemonics(
        group_threshold	= group_threshold,
        groups		= list( g_dims ),
        master_secret	= seed,
        passphrase	= passphrase or b"",
        iteration_exponent = iteration_exponent,
    )
    requires			= commas( f"{n}({r}/{s})" for n,(r,s) in zip( g_names, g_dims ))
    log.warning( f"Generated {len( seed ) * 8}-bit seed SLIP-39 Mnemonics; recover w/ {group_threshold} of {len( g_names )} groups {requires}" )
    return {
        g_name: (g_of, g_mnems)
        for g_name,(g_of,_),g_mnems in zip( g_names, g_dims, mnems )
    }


def recover_seed(
    mnemonics: Sequence[str],
    passphrase: Optional[Union[bytes,str]] = None,
) -> bytes:
    """Recover the issuance seed from a sufficient set of its SLIP-39 mnemonics."""
    if isinstance( passphrase, str ):
        passphrase		= passphrase.encode( 'UTF-8' )
    mnemonics			= [ m.strip() for m in mnemonics if m and m.strip() ]
    try:
        seed			= shamir_mnemonic.combine_mnemonics( mnemonics, passphrase or b"" )
    except shamir_mnemonic.MnemonicError as exc:
        raise ValueError( f"Unable to recover seed from {len( mnemonics )} SLIP-39 mnemonics: {exc}" ) from None
    log.info( f"Recovered {len( seed ) * 8}-bit seed from {len( mnemonics )} SLIP-39 mnemonics" )
    return seed
