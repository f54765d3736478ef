"""
Process registry: maps process names to physics models.

Example: "ee->mumu" for e+ e- -> mu+ mu- in QED.
"""
from .flat import FlatProcess
from .ee_mumu import EEToMuMuProcess


# Global registry: name -> ScatteringProcess instance
_REGISTRY: dict = {}


def register(key: str, model):
    """
    Register a scattering process under a name.

    Example:
        >>> register("ee->mumu", EEToMuMuProcess())
    """
    _REGISTRY[key] = model


def get_process(key):
    """
    Resolve a process by name.

    Returns:
        ScatteringProcess instance (fallback: FlatProcess)
    """
    return _REGISTRY.get(key, FlatProcess())


def list_registered_processes():
    """List all registered processes."""
    return {k: v.name for k, v in _REGISTRY.items()}


# ========== AUTO-REGISTER KNOWN PHYSICS ==========
register("ee->mumu", EEToMuMuProcess())
register("flat", FlatProcess())
