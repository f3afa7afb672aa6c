"""Chain engine — the external collaborator that estimates, signs and broadcasts."""

from tezos_bridge.engine.client import EngineClient
from tezos_bridge.engine.protocol import ChainEngine

__all__ = ["ChainEngine", "EngineClient"]
