# -*- mode: python ; coding: utf-8 -*-
import hashlib
import hmac

from datetime		import datetime, timezone

import pytest

from .keys		import (
    ORDER, InvalidIssuanceKey, DerivationExhausted,
    generate_seed, generate_master_key, path_hardened_indices, scalar_valid, find_valid_scalar,
    derive_issuance_key, public_key, normalize, derive_validating_key, encode_issuer, decode_issuer,
    identity_from_seed, identity_normalized, upgrade_identity, resolve_identity, IssuanceKeys,
)
from .keystore		import KeysMemory

from .dependency_test	import SEED_XMAS, SEED_XMAS_HEX, SEED_ONES, SEED_ZERO, G_X_HEX

NOW				= datetime( 2025, 1, 1, tzinfo=timezone.utc )


def test_generate_seed():
    assert len( generate_seed() ) == 32
    assert len( generate_seed( 32 )) == 32
    assert len( generate_seed( 64 )) == 64
    assert len( generate_seed( 252 )) == 252
    assert generate_seed() != generate_seed()
    for bad in ( 0, 31, 253 ):
        with pytest.raises( ValueError, match="between 32 and 252" ):
            generate_seed( bad )


def test_generate_master_key():
    master			= generate_master_key( SEED_XMAS )
    assert len( master.key ) == 32
    assert len( master.chain_code ) == 32
    assert master == generate_master_key( SEED_XMAS )
    assert master == generate_master_key( SEED_XMAS_HEX )
    I				= hmac.new( b"ZcashSA_Issue_V1", SEED_XMAS, hashlib.sha512 ).digest()
    assert master.key == I[:32] and master.chain_code == I[32:]
    assert generate_master_key( SEED_ONES ) != master

    with pytest.raises( ValueError ):
        generate_master_key( b'\x01' * 31 )
    with pytest.raises( ValueError ):
        generate_master_key( b'\x01' * 253 )


def test_path_hardened_indices():
    assert path_hardened_indices() == [0x800000E3, 0x80000085, 0x80000000]
    assert path_hardened_indices( 5 ) == [227 | 0x80000000, 133 | 0x80000000, 5 | 0x80000000]
    assert all( i & 0x80000000 for i in path_hardened_indices( 2**31 - 1 ))
    for bad in ( -1, 2**31 ):
        with pytest.raises( ValueError ):
            path_hardened_indices( bad )


def test_scalar_valid():
    assert not scalar_valid( b'\x00' * 32 )
    assert scalar_valid( ( 1 ).to_bytes( 32, 'big' ))
    assert scalar_valid( ( ORDER - 1 ).to_bytes( 32, 'big' ))
    assert not scalar_valid( ORDER.to_bytes( 32, 'big' ))
    assert not scalar_valid( b'\xff' * 32 )
    assert not scalar_valid( b'\x01' * 31 )


def test_derive_issuance_key():
    master			= generate_master_key( SEED_XMAS )
    derived			= derive_issuance_key( master.key, master.chain_code )
    assert len( derived.isk ) == 32 and len( derived.chain_code ) == 32
    assert scalar_valid( derived.isk )
    assert derived == derive_issuance_key( master.key, master.chain_code, 0 )
    assert derived != derive_issuance_key( master.key, master.chain_code, 1 )

    # Manually walk m/227'/133'/0'; an invalid scalar is (astronomically) unlikely here
    key,cc			= master.key, master.chain_code
    for index in ( 227, 133, 0 ):
        data			= b'\x00' + key + ( index | 0x80000000 ).to_bytes( 4, 'big' )
        I			= hmac.new( cc, data, hashlib.sha512 ).digest()
        key,cc			= I[:32], I[32:]
    assert derived.isk == key
    assert derived.chain_code == cc


def test_find_valid_scalar_retry():
    """Invalid candidates are retried w/ a counter replacing the index; deterministically."""
    cc				= b'\x11' * 32
    data			= b'\x00' + b'\x22' * 32 + ( 0x80000000 | 227 ).to_bytes( 4, 'big' )

    key,chain,counter		= find_valid_scalar( cc, data )
    assert counter == 0
    I				= hmac.new( cc, data, hashlib.sha512 ).digest()
    assert (key, chain) == (I[:32], I[32:])

    def rejecting( n ):
        """Reject the first n candidates"""
        seen			= []

        def valid( k ):
            seen.append( k )
            return len( seen ) > n and scalar_valid( k )
        return valid

    key,chain,counter		= find_valid_scalar( cc, data, valid=rejecting( 2 ))
    assert counter == 2
    I				= hmac.new( cc, data[:-4] + ( 2 ).to_bytes( 4, 'big' ), hashlib.sha512 ).digest()
    assert (key, chain) == (I[:32], I[32:])
    assert find_valid_scalar( cc, data, valid=rejecting( 2 )) == (key, chain, counter)

    # A bounded counter never wraps; exhaustion is fatal
    with pytest.raises( DerivationExhausted ):
        find_valid_scalar( cc, data, valid=lambda k: False, limit=3 )
    assert find_valid_scalar( cc, data, valid=rejecting( 3 ), limit=3 )[2] == 3


def test_derive_issuance_key_retry():
    master			= generate_master_key( SEED_XMAS )
    normal			= derive_issuance_key( master.key, master.chain_code )

    def first_rejected():
        rejected		= set()

        def valid( k ):
            if k not in rejected and len( rejected ) < 3:
                rejected.add( k )
                return False
            return scalar_valid( k )
        return valid

    retried			= derive_issuance_key( master.key, master.chain_code, valid=first_rejected() )
    assert retried != normal
    assert retried == derive_issuance_key( master.key, master.chain_code, valid=first_rejected() )
    assert scalar_valid( retried.isk )


def test_derive_validating_key_normalization():
    one				= ( 1 ).to_bytes( 32, 'big' )
    minus_one			= ( ORDER - 1 ).to_bytes( 32, 'big' )

    # 1 -> G has even Y; unchanged
    ik,isk			= derive_validating_key( one )
    assert ik.hex() == G_X_HEX
    assert isk == one

    # -1 -> -G has odd Y; the scalar is negated, to 1
    ik,isk			= derive_validating_key( minus_one )
    assert ik.hex() == G_X_HEX
    assert isk == one
    assert derive_validating_key( minus_one.hex() ) == (ik, isk)

    assert normalize( minus_one ) == (one, public_key( one ))
    assert public_key( one )[0] == 0x02


def test_derive_validating_key_parity():
    for seed in ( SEED_XMAS, SEED_ONES, SEED_ZERO, b'\x5a' * 64, b'\xa5' * 252 ):
        master			= generate_master_key( seed )
        derived			= derive_issuance_key( master.key, master.chain_code )
        ik,isk			= derive_validating_key( derived.isk )
        pubkey			= public_key( isk )
        assert pubkey[0] == 0x02
        assert pubkey[1:] == ik
        assert isk in ( derived.isk, ( ORDER - int.from_bytes( derived.isk, 'big' )).to_bytes( 32, 'big' ))
        # Normalizing again is a no-op
        assert derive_validating_key( isk ) == (ik, isk)
        assert derive_validating_key( derived.isk ) == (ik, isk)


def test_derive_validating_key_invalid():
    for bad in ( b'\x00' * 32, ORDER.to_bytes( 32, 'big' ), b'\xff' * 32, b'\x01' * 31, b'\x01' * 33, "not hex" ):
        with pytest.raises( InvalidIssuanceKey, match="Invalid issuance key" ):
            derive_validating_key( bad )
    assert issubclass( InvalidIssuanceKey, ValueError )


def test_encode_issuer():
    issuer			= encode_issuer( b'\xab' * 32 )
    assert len( issuer ) == 66
    assert issuer.startswith( "00" )
    assert issuer == "00" + "ab" * 32
    assert encode_issuer( "ab" * 32 ) == issuer
    with pytest.raises( ValueError ):
        encode_issuer( b'\xab' * 31 )

    assert decode_issuer( issuer ) == b'\xab' * 32
    assert decode_issuer( "ab" * 32 ) == b'\xab' * 32
    with pytest.raises( ValueError, match="version" ):
        decode_issuer( "01" + "ab" * 32 )
    with pytest.raises( ValueError ):
        decode_issuer( "ab" * 20 )


def test_identity_from_seed():
    identity			= identity_from_seed( SEED_XMAS, now=NOW )
    assert set( identity ) == {'seed', 'masterKey', 'chainCode', 'isk', 'ik', 'issuer', 'issuerEncoding', 'createdAt'}
    assert identity['seed'] == SEED_XMAS_HEX
    assert identity['createdAt'] == "2025-01-01T00:00:00.000Z"
    assert identity['issuer'] == identity['issuerEncoding'] == "00" + identity['ik']
    assert identity_normalized( identity )
    assert identity == identity_from_seed( SEED_XMAS_HEX, now=NOW )
    assert identity_from_seed( SEED_XMAS, account=1, now=NOW )['issuer'] != identity['issuer']

    master			= generate_master_key( SEED_XMAS )
    assert identity['masterKey'] == master.key.hex()
    assert identity['chainCode'] == master.chain_code.hex()
    ik,isk			= derive_validating_key( derive_issuance_key( *master ).isk )
    assert identity['ik'] == ik.hex()
    assert identity['isk'] == isk.hex()

    generated			= identity_from_seed()
    assert len( bytes.fromhex( generated['seed'] )) == 32
    assert generated['issuer'] != identity['issuer']


def test_upgrade_identity():
    legacy			= dict(
        seed		= SEED_XMAS_HEX,
        isk		= ( ORDER - 1 ).to_bytes( 32, 'big' ).hex(),
        createdAt	= "2024-01-01T00:00:00.000Z",
    )
    assert not identity_normalized( legacy )
    upgraded			= upgrade_identity( legacy, now=NOW )
    assert upgraded['isk'] == "00" * 31 + "01"
    assert upgraded['ik'] == G_X_HEX
    assert upgraded['issuer'] == upgraded['issuerEncoding'] == "00" + G_X_HEX
    assert upgraded['upgradedAt'] == "2025-01-01T00:00:00.000Z"
    assert upgraded['createdAt'] == legacy['createdAt']
    assert identity_normalized( upgraded )
    assert 'issuer' not in legacy  # unchanged

    with pytest.raises( ValueError ):
        upgrade_identity( dict( seed=SEED_XMAS_HEX ))
    with pytest.raises( InvalidIssuanceKey ):
        upgrade_identity( dict( isk="00" * 32 ))


def test_resolve_identity():
    identity,changed		= resolve_identity( None, now=NOW, seed=SEED_XMAS )
    assert changed
    assert identity == identity_from_seed( SEED_XMAS, now=NOW )

    same,changed		= resolve_identity( identity )
    assert not changed
    assert same is identity

    legacy			= dict( identity, issuer=identity['issuer'][2:] )  # An old 64-hex issuer
    upgraded,changed		= resolve_identity( legacy, now=NOW )
    assert changed
    assert upgraded['issuer'] == identity['issuer']
    assert 'upgradedAt' in upgraded


class CountingMemory( KeysMemory ):
    saves			= 0

    def save( self, identity ):
        self.saves	       += 1
        super().save( identity )


def test_issuance_keys():
    repository			= CountingMemory()
    keys			= IssuanceKeys( repository, seed=SEED_XMAS )
    issuer			= keys.issuer
    assert issuer == identity_from_seed( SEED_XMAS )['issuer']
    assert keys.ik.hex() == issuer[2:]
    assert public_key( keys.isk )[1:] == keys.ik
    assert keys.identity is keys.identity
    assert repository.saves == 1
    assert repository.load()['issuer'] == issuer
    assert issuer in str( keys )

    # Another instance on the same repository loads (does not regenerate) the identity
    again			= IssuanceKeys( repository )
    assert again.issuer == issuer
    assert repository.saves == 1

    # A legacy identity is upgraded, and saved, once
    legacy			= CountingMemory( dict( isk=( ORDER - 1 ).to_bytes( 32, 'big' ).hex() ))
    keys			= IssuanceKeys( legacy )
    assert keys.issuer == "00" + G_X_HEX
    assert keys.isk == ( 1 ).to_bytes( 32, 'big' )
    assert legacy.saves == 1
    assert IssuanceKeys( legacy ).issuer == keys.issuer
    assert legacy.saves == 1
