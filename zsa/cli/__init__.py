
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

from __future__          import annotations

import click
import json
import logging
import sys

import tabulate

from ..			import (
    IssuanceKeys, IssuanceTransaction, KeysFile,
    compute_asset_id, compute_asset_digest, compute_asset_base, create_asset_description,
    identity_from_seed, backup_mnemonics, recover_seed, parse_recipient, validate_token_data,
)
from ..util		import log_cfg, log_level, input_secure, ordinal
from ..defaults		import KEYS_FILE, KEYS_ENVVAR, ACCOUNT

__author__                      = "Perry Kundert"
__email__                       = "perry@dominionrnd.com"
__copyright__                   = "Copyright (c) 2025 Dominion Research & Development Corp."
__license__                     = "Dual License: GPLv3 (or later) and Commercial (see LICENSE)"

"""
Provide basic CLI access to the zsa issuance API.

Output generally defaults to JSON.  Use -v for more details, and --no-json to emit standard text output instead.
"""

log				= logging.getLogger( __package__ )


def emit( data, headers=("Field", "Value") ):
    """Output a mapping as JSON, or as a text table."""
    if cli.json:
        click.echo( json.dumps( data, indent=4 ))
    else:
        click.echo( tabulate.tabulate(
            [ (k, json.dumps( v ) if isinstance( v, (list,dict) ) else v) for k,v in data.items() ],
            headers=headers, tablefmt='orgtbl' ))


def fail( message ):
    log.error( message )
    sys.exit( 1 )


@click.group()
@click.option('-v', '--verbose', count=True)
@click.option('-q', '--quiet', count=True)
@click.option( '--json/--no-json', default=True, help="Output JSON (the default)")
@click.option( '--keys', envvar=KEYS_ENVVAR, default=KEYS_FILE, show_default=True,
               help=f"The issuance keys JSON file (or ${KEYS_ENVVAR})" )
def cli( verbose, quiet, json, keys ):
    cli.verbosity		= verbose - quiet
    log_cfg['level']		= log_level( cli.verbosity )
    logging.basicConfig( **log_cfg )
    if verbose or quiet:
        logging.getLogger().setLevel( log_cfg['level'] )
    cli.json			= json
    cli.keys			= keys
cli.verbosity			= 0  # noqa: E305
cli.json			= False
cli.keys			= KEYS_FILE


def issuance_keys():
    return IssuanceKeys( KeysFile( cli.keys ))


@click.command()
def identity():
    """Load (or generate and save) the issuance keys, and show the public issuer identity."""
    try:
        keys			= issuance_keys()
        record			= keys.identity
    except ValueError as exc:
        fail( f"Unable to load issuance keys from {cli.keys}: {exc}" )
    shown			= dict(
        issuer		= record['issuer'],
        ik		= record['ik'],
        createdAt	= record.get( 'createdAt' ),
    )
    if record.get( 'upgradedAt' ):
        shown['upgradedAt']	= record['upgradedAt']
    if cli.verbosity > 0:
        shown['keys']		= str( keys.repository )
    emit( shown )


@click.command()
@click.option( "--name", required=True, help="The asset name" )
@click.option( "--symbol", required=True, help="The asset symbol" )
@click.option( "--description", default="", help="The asset description (may contain '|')" )
@click.option( "--issuer", default=None, help="A 66-hex issuer (default: the issuer of the issuance keys)" )
def asset( name, symbol, description, issuer ):
    """Compute the AssetId, digest and base for an asset description."""
    asset_desc			= create_asset_description( name, symbol, description )
    try:
        if issuer is None:
            issuer		= issuance_keys().issuer
        aid			= compute_asset_id( issuer, asset_desc )
    except ValueError as exc:
        fail( f"Unable to compute AssetId: {exc}" )
    digest			= compute_asset_digest( aid.asset_id )
    emit( dict(
        assetDesc	= asset_desc,
        issuer		= aid.issuer,
        assetDescHash	= aid.asset_desc_hash,
        assetId		= aid.asset_id,
        assetDigest	= digest.hex(),
        assetBase	= compute_asset_base( digest ),
    ))


@click.command()
@click.option( "--name", required=True, help="The token name" )
@click.option( "--symbol", required=True, help="The token symbol (2-10 characters)" )
@click.option( "--description", default="", help="The token description" )
@click.option( "--recipient", "recipients", multiple=True, required=True,
               help="A recipient <address>:<amount>; may be repeated" )
@click.option( '--finalize/--no-finalize', default=False, help="Finalize the asset; no further issuance allowed" )
@click.option( '--prepare/--no-prepare', default=False, help="Wrap the transaction, ready for submission" )
def issue( name, symbol, description, recipients, finalize, prepare ):
    """Build and sign a ZIP-227 issuance transaction."""
    try:
        token_data		= validate_token_data( dict( name=name, symbol=symbol, description=description ))
        recipients		= [ parse_recipient( r ) for r in recipients ]
        issuance		= IssuanceTransaction( issuance_keys() )
        tx			= issuance.build_issuance_transaction( token_data, recipients, finalize )
    except ValueError as exc:
        fail( f"Unable to build issuance transaction: {exc}" )
    if prepare:
        tx			= issuance.prepare_transaction( tx )
    click.echo( json.dumps( tx, indent=4 ))


@click.command()
@click.option( "--threshold", type=int, default=None, help="Number of groups required for recovery (default: half of groups, rounded up)" )
@click.option( "-g", "--group", "groups", multiple=True, help="A group name[[<require>/]<size>], eg. 'Backup(2/3)'" )
@click.option( "--passphrase", default=None, help="Encrypt the seed w/ this passphrase, '-' reads it from stdin (default: None)" )
def backup( threshold, groups, passphrase ):
    """Output SLIP-39 mnemonics backing up the issuance seed."""
    if passphrase == '-':
        passphrase		= input_secure( 'Backup passphrase: ', secret=True )
    elif passphrase:
        log.warning( "It is recommended to not use '--passphrase <password>'; specify '-' to read from input" )
    try:
        seed			= issuance_keys().identity['seed']
        mnemonics		= backup_mnemonics( seed, group_threshold=threshold, groups=groups or None, passphrase=passphrase )
    except ValueError as exc:
        fail( f"Unable to back up issuance seed: {exc}" )
    if cli.json:
        click.echo( json.dumps( mnemonics, indent=4 ))
        return
    for g_name,(g_of,g_mnems) in mnemonics.items():
        click.echo( f"{g_name}({g_of}/{len( g_mnems )}):" )
        for mn_n,mnem in enumerate( g_mnems ):
            click.echo( f"    {ordinal( mn_n + 1 ):>4} {mnem}" )


@click.command()
@click.option( "-m", "--mnemonic", "mnemonics", multiple=True, help="Supply another SLIP-39 mnemonic phrase" )
@click.option( "--passphrase", default=None, help="Decrypt the seed w/ this passphrase, '-' reads it from stdin (default: None)" )
@click.option( "--account", type=int, default=ACCOUNT, show_default=True, help="The issuance account to derive" )
@click.option( '--force/--no-force', default=False, help="Replace any existing issuance keys" )
def restore( mnemonics, passphrase, account, force ):
    """Recover the issuance seed from SLIP-39 mnemonics, and save the re-derived issuance keys."""
    repository			= KeysFile( cli.keys )
    if not force:
        try:
            existing		= repository.load()
        except ValueError as exc:
            fail( f"Unable to load issuance keys from {repository}: {exc}; use --force to replace them" )
        if existing is not None:
            fail( f"Issuance keys already exist in {repository}; use --force to replace them" )
    if passphrase == '-':
        passphrase		= input_secure( 'Backup passphrase: ', secret=True )
    mnemonics			= list( mnemonics )
    if not mnemonics:
        # Read mnemonics, one per line, 'til an empty line (or EOF)
        while True:
            try:
                phrase		= input_secure( f"Enter {ordinal( len( mnemonics ) + 1 )} SLIP-39 mnemonic: ", secret=False )
            except EOFError:
                break
            if not phrase or not phrase.strip():
                break
            mnemonics.append( phrase )
    try:
        seed			= recover_seed( mnemonics, passphrase=passphrase )
        record			= identity_from_seed( seed, account=account )
    except ValueError as exc:
        fail( f"Unable to restore issuance keys: {exc}" )
    repository.save( record )
    emit( dict(
        issuer		= record['issuer'],
        ik		= record['ik'],
        createdAt	= record['createdAt'],
    ))


cli.add_command( identity )
cli.add_command( asset )
cli.add_command( issue )
cli.add_command( backup )
cli.add_command( restore )
