"""py-tezos-bridge: transaction preparation and status for Tezos accounts."""

__version__ = "0.1.0"

FAMILY = "tezos"
