
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
import hmac
import logging
import secrets

from collections	import namedtuple
from datetime		import datetime
from typing		import Callable, Dict, List, Optional, Tuple, Union

from ecdsa		import SigningKey, SECP256k1

from .defaults		import (
    SEED_LENGTH, SEED_LENGTHS, MKG_DOMAIN, HARDENED, PURPOSE, COIN_TYPE, ACCOUNT, RETRY_LIMIT,
    ISSUER_VERSION,
)
from .keystore		import KeysMemory
from .util		import into_bytes, timestamp

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

log				= logging.getLogger( __package__ )

ORDER				= SECP256k1.order


class InvalidIssuanceKey( ValueError ):
    """The supplied issuance key is not a valid secp256k1 private scalar."""


class DerivationExhausted( RuntimeError ):
    """No valid child scalar was found within the available retry counter space."""


MasterKey = namedtuple( 'MasterKey', ('key', 'chain_code') )
Derived = namedtuple( 'Derived', ('isk', 'chain_code') )
Validating = namedtuple( 'Validating', ('ik', 'isk') )


def generate_seed(
    length: int			= SEED_LENGTH,
) -> bytes:
    """Generate a new random issuance seed of 32 to 252 bytes."""
    lo,hi			= SEED_LENGTHS
    if not lo <= length <= hi:
        raise ValueError( f"Seed length must be between {lo} and {hi} bytes, not {length}" )
    return secrets.token_bytes( length )


def generate_master_key(
    seed: Union[bytes,str],
) -> MasterKey:
    """ZIP-227 MKGh_Issuance( seed ): the HMAC-SHA512 of the seed, keyed by the Issuance MKG domain.
    The first 32 bytes are the master key, the last 32 bytes its chain code.

    """
    seed			= into_bytes( seed, what="seed" )
    lo,hi			= SEED_LENGTHS
    if not lo <= len( seed ) <= hi:
        raise ValueError( f"Seed length must be between {lo} and {hi} bytes, not {len( seed )}" )
    I				= hmac.new( MKG_DOMAIN, seed, hashlib.sha512 ).digest()
    return MasterKey( I[:32], I[32:] )


def path_hardened_indices(
    account: int		= ACCOUNT,
) -> List[int]:
    """The hardened m_Issuance/purpose'/coin_type'/account' derivation path, eg. m/227'/133'/0'."""
    if not 0 <= account < HARDENED:
        raise ValueError( f"Account must be in the range [0,{HARDENED}), not {account}" )
    return [
        index | HARDENED
        for index in ( PURPOSE, COIN_TYPE, account )
    ]


def scalar_valid( key: bytes ) -> bool:
    """A valid secp256k1 private key is 32 bytes, non-zero, and less than the group order."""
    return len( key ) == 32 and 0 < int.from_bytes( key, 'big' ) < ORDER


def find_valid_scalar(
    chain_code: bytes,
    data: bytes,
    valid: Callable[[bytes], bool] = scalar_valid,
    limit: int			= RETRY_LIMIT,
) -> Tuple[bytes, bytes, int]:
    """Derive the child (key, chain_code) from the parent chain_code and derivation data, returning
    also the retry counter that produced it (0 if the first candidate was valid).

    If a candidate key is not a valid scalar, the last 4 bytes (the index) of the original data are
    overwritten w/ a big-endian counter 1, 2, ... and re-hashed, 'til a valid key is found.  This is
    entirely deterministic.  The counter never wraps; if limit is exceeded, DerivationExhausted.

    """
    limit			= min( limit, RETRY_LIMIT )
    attempt			= data
    for counter in range( limit + 1 ):
        if counter:
            attempt		= data[:-4] + counter.to_bytes( 4, 'big' )
        I			= hmac.new( chain_code, attempt, hashlib.sha512 ).digest()
        if valid( I[:32] ):
            if counter:
                log.debug( f"Derived a valid child scalar after {counter} retries" )
            return I[:32], I[32:], counter
    raise DerivationExhausted( f"No valid child scalar found in {limit} retries" )


def derive_issuance_key(
    master_key: bytes,
    chain_code: bytes,
    account: int		= ACCOUNT,
    valid: Callable[[bytes], bool] = scalar_valid,
    limit: int			= RETRY_LIMIT,
) -> Derived:
    """Derive the issuance authorizing key (isk) at m_Issuance/227'/133'/<account>'.  Each hardened
    child is derived from the data 0x00 || parent key || index.

    """
    key				= into_bytes( master_key, length=32, what="master key" )
    cc				= into_bytes( chain_code, length=32, what="chain code" )
    for index in path_hardened_indices( account ):
        data			= b'\x00' + key + index.to_bytes( 4, 'big' )
        key,cc,_		= find_valid_scalar( cc, data, valid=valid, limit=limit )
    return Derived( key, cc )


def public_key( isk: bytes ) -> bytes:
    """The 33-byte compressed secp256k1 public key for isk."""
    sk				= SigningKey.from_string( isk, curve=SECP256k1 )
    return sk.get_verifying_key().to_string( "compressed" )


def normalize( isk: bytes ) -> Tuple[bytes, bytes]:
    """Return the sign-normalized (isk, compressed public key), such that the public key always has
    an even Y (0x02 prefix).  An odd Y is corrected by negating the scalar (order - isk).  The
    supplied isk must be valid.

    """
    pubkey			= public_key( isk )
    if pubkey[0] == 0x03:
        isk			= ( ORDER - int.from_bytes( isk, 'big' )).to_bytes( 32, 'big' )
        pubkey			= public_key( isk )
    return isk, pubkey


def derive_validating_key(
    isk: Union[bytes,str],
) -> Validating:
    """Derive the 32-byte x-only issuance validating key (ik) from isk.  Returns the ik, and the
    normalized isk; this normalized isk replaces the supplied one from now on.

    """
    try:
        isk			= into_bytes( isk, what="issuance key" )
    except ValueError:
        raise InvalidIssuanceKey( "Invalid issuance key" ) from None
    if not scalar_valid( isk ):
        raise InvalidIssuanceKey( "Invalid issuance key" )
    isk,pubkey			= normalize( isk )
    return Validating( pubkey[1:], isk )


def encode_issuer( ik: Union[bytes,str] ) -> str:
    """The ZIP-227 ik_encoding issuer identifier: hex( 0x00 || ik ), always 66 hex digits."""
    ik				= into_bytes( ik, length=32, what="validating key" )
    return ( ISSUER_VERSION + ik ).hex()


def decode_issuer( issuer: Union[bytes,str] ) -> bytes:
    """Recover the 32-byte ik from an encoded 66-hex issuer, or accept a raw 64-hex ik."""
    issuer			= into_bytes( issuer, what="issuer" )
    if len( issuer ) == 33:
        if issuer[:1] != ISSUER_VERSION:
            raise ValueError( f"Unsupported issuer encoding version 0x{issuer[0]:02x}" )
        return issuer[1:]
    if len( issuer ) == 32:
        return issuer
    raise ValueError( f"The issuer must be a 33-byte encoding or a 32-byte key, not {len( issuer )} bytes" )


#
# Issuance identity records
#
#     The persisted identity is a plain dict of hex-encoded fields, in the schema:
#
#         {seed, masterKey, chainCode, isk, ik, issuer, issuerEncoding, createdAt, upgradedAt?}
#
#     Note that 'chainCode' is the master chain code; the derived chain code is never kept.
#
def identity_from_seed(
    seed: Optional[Union[bytes,str]] = None,
    account: int		= ACCOUNT,
    now: Optional[datetime]	= None,
) -> Dict[str, str]:
    """Derive a complete issuance identity record from seed (generating a new one, if None)."""
    seed			= generate_seed() if seed is None else into_bytes( seed, what="seed" )
    master			= generate_master_key( seed )
    derived			= derive_issuance_key( master.key, master.chain_code, account )
    ik,isk			= derive_validating_key( derived.isk )
    issuer			= encode_issuer( ik )
    log.info( f"Derived issuer {issuer} from {len( seed ) * 8}-bit seed at account {account}" )
    return dict(
        seed		= seed.hex(),
        masterKey	= master.key.hex(),
        chainCode	= master.chain_code.hex(),
        isk		= isk.hex(),
        ik		= ik.hex(),
        issuer		= issuer,
        issuerEncoding	= issuer,
        createdAt	= timestamp( now ),
    )


def identity_normalized( identity: Dict[str, str] ) -> bool:
    """A current identity has a 66-hex issuer; earlier records hold only an un-normalized isk."""
    issuer			= identity.get( 'issuer' )
    return isinstance( issuer, str ) and len( issuer ) == 66


def upgrade_identity(
    identity: Dict[str, str],
    now: Optional[datetime]	= None,
) -> Dict[str, str]:
    """Re-derive the ik and issuer from a legacy identity's stored isk, replacing the isk w/ its
    normalized form.  Returns a new record; the supplied one is unchanged.

    """
    if not identity or not identity.get( 'isk' ):
        raise ValueError( "Unable to upgrade legacy issuance keys; no issuance key present" )
    ik,isk			= derive_validating_key( identity['isk'] )
    issuer			= encode_issuer( ik )
    log.info( f"Upgraded legacy issuance keys to issuer {issuer}" )
    return dict(
        identity,
        ik		= ik.hex(),
        isk		= isk.hex(),
        issuer		= issuer,
        issuerEncoding	= issuer,
        upgradedAt	= timestamp( now ),
    )


def resolve_identity(
    loaded: Optional[Dict[str, str]],
    now: Optional[datetime]	= None,
    seed: Optional[Union[bytes,str]] = None,
) -> Tuple[Dict[str, str], bool]:
    """The generate-or-load-or-upgrade decision, as a pure transition over an optional loaded
    record.  Returns the identity to use, and whether it must be (re-)persisted.

    """
    if loaded is None:
        return identity_from_seed( seed, now=now ), True
    if not identity_normalized( loaded ):
        return upgrade_identity( loaded, now=now ), True
    return loaded, False


class IssuanceKeys:
    """The issuance identity, loaded from (or generated and saved into) a key repository on first
    use, and cached thereafter.  Any repository providing:

      .load	-- return the persisted identity dict, or None
      .save	-- persist the supplied identity dict

    may be used; see keystore.KeysFile and keystore.KeysMemory.  Callers are responsible for
    serializing the first-time initialization of a shared repository.

    """
    def __init__( self, repository=None, seed: Optional[Union[bytes,str]] = None ):
        if repository is None:
            repository		= KeysMemory()
        self.repository		= repository
        self.seed		= seed		# Optional fixed seed, iff a new identity is generated
        self._identity		= None

    def generate_or_load_keys( self ) -> Dict[str, str]:
        if self._identity is None:
            identity,changed	= resolve_identity( self.repository.load(), seed=self.seed )
            if changed:
                self.repository.save( identity )
                log.info( f"Saved issuance keys for issuer {identity['issuer']}" )
            self._identity	= identity
        return self._identity

    @property
    def identity( self ) -> Dict[str, str]:
        return self.generate_or_load_keys()

    @property
    def issuer( self ) -> str:
        return self.identity['issuer']

    @property
    def ik( self ) -> bytes:
        return bytes.fromhex( self.identity['ik'] )

    @property
    def isk( self ) -> bytes:
        return bytes.fromhex( self.identity['isk'] )

    def __str__( self ):
        return f"{self.__class__.__name__}( {self._identity['issuer'] if self._identity else '<unloaded>'} )"
