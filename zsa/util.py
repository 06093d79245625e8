
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

import getpass
import logging
import sys

from datetime		import datetime, timezone
from typing		import Optional, Union


__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( "util" )


log_cfg				= {
    "level":	logging.WARNING,
    "datefmt":	'%Y-%m-%d %H:%M:%S',
    "format":	'%(asctime)s %(name)-16.16s %(message)s',
}

log_levelmap 			= {
    -2: logging.FATAL,
    -1: logging.ERROR,
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def log_level( adjust ):
    """Return a logging level corresponding to the +'ve/-'ve adjustment"""
    return log_levelmap[
        max(
            min(
                adjust,
                max( log_levelmap.keys() )
            ),
            min( log_levelmap.keys() )
        )
    ]


def ordinal( num ):
    ordinal_dict		= {1: "st", 2: "nd", 3: "rd"}
    q, mod			= divmod( num, 10 )
    suffix			= q % 10 != 1 and ordinal_dict.get(mod) or "th"
    return f"{num}{suffix}"


def commas( seq, final=None ):  # supply alternative final connector, eg. 'and', 'or'
    """Join the sequence w/ commas, optionally using a different final connector, eg:

    >>> commas( [32, 64, 128], final='or' )
    '32, 64 or 128'
    """
    seq				= list( map( str, seq ))
    if final and len(seq) > 1:
        seq			= seq[:-2] + [f"{seq[-2]} {final} {seq[-1]}"]
    return ', '.join( seq )


def into_bytes( data: Union[bytes,str], length: Optional[int] = None, what: str = "data" ) -> bytes:
    """Convert hex data w/ optional '0x' prefix into bytes, optionally confirming its length.  Only
    the length (never the content) appears in any error, as the data is often secret.

    """
    if isinstance( data, (bytes,bytearray) ):
        data			= bytes( data )
    elif not isinstance( data, str ):
        raise ValueError( f"The {what} must be bytes or hex, not {type( data ).__name__}" )
    else:
        if data[:2].lower() == '0x':
            data		= data[2:]
        try:
            data		= bytes.fromhex( data )
        except ValueError as exc:
            raise ValueError( f"Invalid hex {what}: {exc}" ) from None
    if length is not None and len( data ) != length:
        raise ValueError( f"The {what} must be {length} bytes, not {len( data )} bytes" )
    return data


def timestamp( now: Optional[datetime] = None ) -> str:
    """An ISO-8601 UTC timestamp, w/ millisecond precision and a 'Z' suffix."""
    if now is None:
        now			= datetime.now( timezone.utc )
    return now.astimezone( timezone.utc ).isoformat( timespec='milliseconds' ).replace( '+00:00', 'Z' )


def input_secure( prompt, secret=True, file=None ):
    """When getting secure (optionally secret) input from standard input, we don't want to use getpass, which
    attempts to read from /dev/tty.

    """
    if ( file or sys.stdin ).isatty():
        # From TTY; provide prompts, and do not echo secret input
        if secret:
            return getpass.getpass( prompt, stream=file )
        elif file:
            return file.readline()
        else:
            return input( prompt )
    else:
        # Not a TTY; don't litter pipeline output with prompts
        if file:
            return file.readline()
        return input()
