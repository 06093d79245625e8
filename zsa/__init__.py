
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
from .version		import __version__  # noqa F401
from .hashing		import personalization, hash256, hash512  # noqa F401
from .keystore		import KeysFile, KeysMemory  # noqa F401
from .keys		import (  # noqa F401
    InvalidIssuanceKey, DerivationExhausted, MasterKey, Derived, Validating,
    generate_seed, generate_master_key, path_hardened_indices, scalar_valid, find_valid_scalar,
    derive_issuance_key, public_key, normalize, derive_validating_key, encode_issuer, decode_issuer,
    identity_from_seed, identity_normalized, upgrade_identity, resolve_identity, IssuanceKeys,
)
from .asset		import (  # noqa F401
    AssetId, AssetDescription,
    compute_asset_desc_hash, compute_asset_id, compute_asset_digest, compute_asset_base,
    create_asset_description, parse_asset_description,
)
from .issuance		import (  # noqa F401
    MacSigner, IssuanceTransaction, validate_amount, validate_token_data, parse_recipient,
    sighash_issuance_bundle, issue_token,
)
from .backup		import group_parser, backup_mnemonics, recover_seed  # noqa F401
