"""WhaleScope package.

Whale tracking and movement analysis for Solana tokens, served as a
read-only REST API over the Helius blockchain-data API.
"""

__version__ = "1.0.0"
__author__ = "WhaleScope Developers"
__email__ = "dev@whalescope.io"
