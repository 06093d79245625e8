# -*- mode: python ; coding: utf-8 -*-
from datetime		import datetime, timezone, timedelta

import pytest

from .util		import into_bytes, timestamp, ordinal, commas


def test_into_bytes():
    assert into_bytes( "00ff" ) == b"\x00\xff"
    assert into_bytes( "0x00FF" ) == b"\x00\xff"
    assert into_bytes( b"\x00\xff" ) == b"\x00\xff"
    assert into_bytes( bytearray( b"\x00\xff" )) == b"\x00\xff"
    assert into_bytes( "ab" * 32, length=32 ) == b"\xab" * 32

    with pytest.raises( ValueError, match="must be 32 bytes, not 31" ):
        into_bytes( "ab" * 31, length=32, what="key" )
    with pytest.raises( ValueError, match="Invalid hex seed" ):
        into_bytes( "zz", what="seed" )


def test_into_bytes_types():
    """Anything but bytes or a str of hex is rejected w/ a ValueError."""
    for bad in ( None, 12345, 1.5, [ "ab" ], dict( hex="ab" )):
        with pytest.raises( ValueError, match="must be bytes or hex" ):
            into_bytes( bad, what="issuer" )


def test_timestamp():
    when			= datetime( 2025, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc )
    assert timestamp( when ) == "2025-01-02T03:04:05.678Z"
    local			= when.astimezone( timezone( timedelta( hours=-7 )))
    assert timestamp( local ) == "2025-01-02T03:04:05.678Z"
    assert timestamp().endswith( 'Z' )


def test_ordinal_commas():
    assert [ ordinal( n ) for n in ( 1, 2, 3, 4, 11, 12, 13, 21, 112 ) ] \
        == [ "1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "112th" ]
    assert commas( [32, 64, 128], final='or' ) == "32, 64 or 128"
    assert commas( [32] ) == "32"
