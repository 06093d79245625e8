import os

#
# All platforms
#
HERE				= os.path.dirname( os.path.abspath( __file__ ))

install_requires		= open( os.path.join( HERE, "requirements.txt" )).readlines()
tests_require			= open( os.path.join( HERE, "requirements-tests.txt" )).readlines()

# Since setuptools is retiring tests_require, add it as an option
extras_require			= {
    'tests':			tests_require,
}

from setuptools import setup  # noqa: E402

# Must work if setup.py is run in the source distribution context, or from
# within the packaged distribution directory.
__version__			= None
try:
    exec( open( 'zsa/version.py', 'r' ).read() )
except FileNotFoundError:
    exec( open( 'version.py', 'r' ).read() )

console_scripts			= [
    'zsa-cli		= zsa.cli:cli',
]

entry_points			= {
    'console_scripts': 		console_scripts,
}

package_dir			= {
    "zsa":			"./zsa",
    "zsa.cli":			"./zsa/cli",
}

long_description_content_type	= 'text/markdown'
long_description		= """\
Zcash Shielded Assets (ZSAs, per ZIP-227) are custom tokens issued on the
Zcash Orchard shielded pool.  Each asset is identified by the issuer's
validating key, and the asset's description; the same issuer issuing
the same description always yields the same AssetId.

The [python-zsa] project derives the issuer's keys deterministically
from a single seed (at the hardened path *m_Issuance/227'/133'/0'*),
computes the domain-separated BLAKE2b AssetIds, digests and asset
bases, and builds (v6) issuance transactions.  The seed is backed up
as SLIP-39 Mnemonics, from which the identical issuer (and hence the
identical AssetIds) may be recovered.

## Issuing an Asset on the Command Line

    $ zsa-cli identity                # Generate (or load) the issuance keys
    $ zsa-cli asset --name PepeCoin --symbol PEPE --description memes
    $ zsa-cli issue --name PepeCoin --symbol PEPE --description memes \\
        --recipient zs1...:1000000
    $ zsa-cli --no-json backup -g Issuer1 -g Backup2/3
    $ zsa-cli --keys restored.json restore < mnemonics.txt

The issuance "signature" is presently a placeholder HMAC-SHA256 keyed by
the issuance key; it is *not* a publicly verifiable signature.

[python-zsa] <https://github.com/pjkundert/python-zsa.git>
"""

classifiers			= [
    "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
    "License :: Other/Proprietary License",
    "Programming Language :: Python :: 3",
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Topic :: Security :: Cryptography",
    "Topic :: Office/Business :: Financial",
]
project_urls			= {
    "Bug Tracker": "https://github.com/pjkundert/python-zsa/issues",
}

setup(
    name			= "zsa",
    version			= __version__,
    install_requires		= install_requires,
    tests_require		= tests_require,
    extras_require		= extras_require,
    packages			= package_dir.keys(),
    package_dir			= package_dir,
    include_package_data	= True,
    zip_safe			= True,
    entry_points		= entry_points,
    author			= "Perry Kundert",
    author_email		= "perry@dominionrnd.com",
    project_urls		= project_urls,
    description			= "Zcash Shielded Asset (ZIP-227) issuance keys, AssetIds and issuance transactions",
    long_description		= long_description,
    long_description_content_type = long_description_content_type,
    license			= "Dual License; GPLv3 and Proprietary",
    keywords			= "Zcash ZSA ZIP-227 Orchard shielded asset issuance SLIP-39 seed recovery",
    url				= "https://github.com/pjkundert/python-zsa",
    classifiers			= classifiers,
    python_requires		= ">=3.9",
)
