"""nodecred — node credentials for an operator network.

Mint a credential with a secret key, ship it as JSON, a token pair or a binary
blob, and check it later with the same key.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.0"
