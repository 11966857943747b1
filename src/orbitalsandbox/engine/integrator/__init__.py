from orbitalsandbox.engine.integrator.kick import kick
from orbitalsandbox.engine.integrator.drift import drift

__all__ = ["kick", "drift"]
