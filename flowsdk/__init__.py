"""Building blocks for the Flow blockchain: addresses, account keys, account proofs, RLP and chain entities."""

__version__ = "0.1.0"