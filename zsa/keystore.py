
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

import json
import logging
import os
import tempfile

from pathlib		import Path
from typing		import Dict, Optional, Union

from .defaults		import KEYS_FILE

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )


class KeysMemory:
    """Keeps the issuance identity in memory only; useful for tests, and ephemeral issuers."""
    def __init__( self, identity: Optional[Dict[str, str]] = None ):
        self.identity		= dict( identity ) if identity else None

    def load( self ) -> Optional[Dict[str, str]]:
        return dict( self.identity ) if self.identity else None

    def save( self, identity: Dict[str, str] ):
        self.identity		= dict( identity )


class KeysFile:
    """Persists the issuance identity as a JSON file.  The keys are stored in the clear (readable
    only by the owner); encrypt the file system, or keep it offline!

    The file is replaced atomically, so a concurrent reader never sees a partial record.  However,
    two processes racing to create the first identity must be serialized by the caller.

    """
    def __init__( self, path: Optional[Union[str,Path]] = None ):
        self.path		= Path( path or KEYS_FILE ).expanduser()

    def load( self ) -> Optional[Dict[str, str]]:
        try:
            with self.path.open( 'r', encoding='UTF-8' ) as f:
                identity	= json.load( f )
        except FileNotFoundError:
            log.info( f"No issuance keys found in {self.path}" )
            return None
        if not isinstance( identity, dict ):
            raise ValueError( f"Issuance keys in {self.path} are not a JSON object" )
        log.debug( f"Loaded issuance keys from {self.path}" )
        return identity

    def save( self, identity: Dict[str, str] ):
        self.path.parent.mkdir( parents=True, exist_ok=True )
        fd,tmp			= tempfile.mkstemp( dir=self.path.parent, prefix=self.path.name, suffix='.tmp' )
        try:
            with os.fdopen( fd, 'w', encoding='UTF-8' ) as f:
                json.dump( identity, f, indent=2 )
                f.write( '\n' )
            os.chmod( tmp, 0o600 )
            os.replace( tmp, self.path )
        except BaseException:
            os.unlink( tmp )
            raise
        log.info( f"Saved issuance keys to {self.path}" )

    def __str__( self ):
        return str( self.path )
