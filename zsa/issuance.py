
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

import copy
import hashlib
import hmac
import json
import logging

from typing		import Any, Dict, List, Mapping, Optional, Sequence, Union

from .asset		import compute_asset_desc_hash, compute_asset_id, create_asset_description
from .defaults		import SIG_DOMAIN, TX_VERSION, MAX_ISSUE, SYMBOL_LENGTH, NETWORK
from .keys		import IssuanceKeys

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )


class MacSigner:
    """A PLACEHOLDER issuance bundle "signature": HMAC-SHA256 of the sighash, keyed by the isk.

    This is NOT a signature.  It is not publicly verifiable, and anyone able to verify it can also
    forge it.  It stands in for the ZIP-227 BIP-340 Schnorr signature by isk, 'til that is
    available.  Any signer w/ the same .algorithm and .sign( sighash ) -> hex interface may be
    supplied to IssuanceTransaction instead.

    """
    algorithm			= "hmac-sha256-placeholder"

    def __init__( self, isk: bytes ):
        self.isk		= isk

    def sign( self, sighash: bytes ) -> str:
        return hmac.new( self.isk, sighash, hashlib.sha256 ).hexdigest()


def validate_amount( amount: Union[int,str] ) -> int:
    """An issued note value must be an integer in [0, MAX_ISSUE]."""
    if isinstance( amount, bool ) or not isinstance( amount, (int,str) ):
        raise ValueError( f"Invalid issuance amount {amount!r}; must be an integer" )
    try:
        value			= int( amount )
    except ValueError:
        raise ValueError( f"Invalid issuance amount {amount!r}; must be an integer" ) from None
    if not 0 <= value <= MAX_ISSUE:
        raise ValueError( f"Issuance amount {value} must be between 0 and {MAX_ISSUE}" )
    return value


def validate_token_data( token_data: Mapping[str, Any] ) -> Dict[str, str]:
    """Check the name, symbol and description of a new token.  The symbol must be 2-10 characters.
    The strings are returned unaltered, as they are hashed into the AssetId.

    """
    name			= token_data.get( 'name' ) or ""
    symbol			= token_data.get( 'symbol' ) or ""
    if not name.strip() or not symbol.strip():
        raise ValueError( "Missing required token fields: name, symbol" )
    lo,hi			= SYMBOL_LENGTH
    if not lo <= len( symbol ) <= hi:
        raise ValueError( f"Symbol must be between {lo} and {hi} characters" )
    return dict(
        name		= name,
        symbol		= symbol,
        description	= token_data.get( 'description' ) or "",
    )


def parse_recipient( recipient: str ) -> Dict[str, Any]:
    """Parse a "<address>:<amount>" recipient specification."""
    address,sep,amount		= recipient.rpartition( ':' )
    if not sep or not address.strip():
        raise ValueError( f"Invalid recipient {recipient!r}; expected <address>:<amount>" )
    return dict(
        address		= address.strip(),
        amount		= validate_amount( amount.strip() ),
    )


def sighash_issuance_bundle( bundle: Mapping[str, Any] ) -> bytes:
    """The SHA-256 sighash of the compact JSON bundle w/ no signature, salted w/ the issuance
    signature domain.  Fields are serialized in their bundle order and non-ASCII text as raw UTF-8,
    as JSON.stringify does.  Signing a bundle again yields the same sighash.

    """
    unsigned			= dict( bundle, signature=None )
    serialized			= json.dumps( unsigned, separators=(',', ':'), ensure_ascii=False )
    return hashlib.sha256( serialized.encode( 'UTF-8' ) + SIG_DOMAIN ).digest()



class IssuanceTransaction:
    """Builds and signs ZIP-227 issuance bundles and (v6) transactions for the issuer's keys."""

    def __init__( self, keys: Optional[IssuanceKeys] = None, signer=None ):
        self.keys		= keys or IssuanceKeys()
        self._signer		= signer

    @property
    def signer( self ):
        if self._signer is None:
            self._signer	= MacSigner( self.keys.isk )
        return self._signer

    def create_asset_desc( self, token_data: Mapping[str, Any] ) -> str:
        return create_asset_description(
            token_data['name'], token_data['symbol'], token_data.get( 'description' ) or "" )

    def build_issue_action(
        self,
        asset_desc: str,
        recipients: Sequence[Mapping[str, Any]],
        finalize: bool		= False,
    ) -> Dict[str, Any]:
        """An IssueAction w/ one note per recipient {address, amount}, in order."""
        values			= [ validate_amount( r['amount'] ) for r in recipients ]
        asset_desc_hash		= compute_asset_desc_hash( asset_desc )
        asset_id		= compute_asset_id( self.keys.issuer, asset_desc ).asset_id
        notes			= [
            dict(
                recipientAddress = recipient['address'],
                value		= value,
                assetId		= asset_id,
                index		= index,
            )
            for index,(recipient,value) in enumerate( zip( recipients, values ))
        ]
        return dict(
            assetDescHash	= asset_desc_hash.hex(),
            assetDesc		= asset_desc,
            notes		= notes,
            finalize		= bool( finalize ),
            assetId		= asset_id,
        )

    def build_issuance_bundle( self, issue_action: Mapping[str, Any] ) -> Dict[str, Any]:
        return dict(
            issuer		= self.keys.issuer,
            actions		= [ issue_action ],
            signature		= None,
        )

    def sign_issuance_bundle( self, bundle: Mapping[str, Any] ) -> Dict[str, Any]:
        """Return a copy of the bundle, signed by the issuer's signer."""
        sighash			= sighash_issuance_bundle( bundle )
        signed			= copy.deepcopy( dict( bundle ))
        signed['signature']	= self.signer.sign( sighash )
        log.debug( f"Signed issuance bundle for {len( signed['actions'] )} action(s) w/ {self.signer.algorithm}" )
        return signed

    def verify_issuance_bundle( self, bundle: Mapping[str, Any] ) -> bool:
        """Confirm the bundle's signature, by re-signing w/ our signer (only for the placeholder)."""
        signature		= bundle.get( 'signature' )
        if not isinstance( signature, str ):
            return False
        return hmac.compare_digest( signature, self.signer.sign( sighash_issuance_bundle( bundle )))

    def build_issuance_transaction(
        self,
        token_data: Mapping[str, Any],
        recipients: Sequence[Mapping[str, Any]],
        finalize: bool		= False,
    ) -> Dict[str, Any]:
        asset_desc		= self.create_asset_desc( token_data )
        issue_action		= self.build_issue_action( asset_desc, recipients, finalize )
        bundle			= self.sign_issuance_bundle( self.build_issuance_bundle( issue_action ))
        asset_id		= compute_asset_id( self.keys.issuer, asset_desc ).asset_id
        assert asset_id == issue_action['assetId'], \
            "Issuance bundle AssetId inconsistent w/ the issuer's asset description"
        log.info( f"Built v{TX_VERSION} issuance of {sum( n['value'] for n in issue_action['notes'] )} {asset_desc!r}"
                  f" to {len( recipients )} recipient(s){', finalized' if finalize else ''}" )
        return dict(
            version		= TX_VERSION,
            issuanceBundle	= bundle,
            assetId		= asset_id,
            assetDesc		= asset_desc,
            finalize		= bool( finalize ),
        )

    def prepare_transaction( self, tx: Mapping[str, Any] ) -> Dict[str, Any]:
        """Wrap the structured transaction for submission; the actual transaction bytes are built
        by an external transaction tool.

        """
        return dict(
            txData		= tx,
            ready		= True,
            network		= NETWORK,
            note		= f"Transaction prepared according to ZIP 227 (v{tx.get( 'version', TX_VERSION )}). Ready for submission when ZSAs are available.",
        )


def issue_token(
    keys: IssuanceKeys,
    token_data: Mapping[str, Any],
    recipients: List[Mapping[str, Any]],
    finalize: bool		= False,
) -> Dict[str, Any]:
    """Validate the token data and build a signed issuance transaction for it."""
    return IssuanceTransaction( keys ).build_issuance_transaction(
        validate_token_data( token_data ), recipients, finalize )
