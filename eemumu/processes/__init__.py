"""
Scattering-process library for eemumu.

Usage:
    from eemumu.processes import get_process

    proc = get_process("ee->mumu")
    w = proc.differential_cross_section(1000.0, 0.5)
    w_max = proc.max_weight(1000.0)
"""
from .base import ScatteringProcess
from .flat import FlatProcess
from .function import FunctionProcess
from .ee_mumu import EEToMuMuProcess
from .registry import register, get_process, list_registered_processes

__all__ = [
    "ScatteringProcess",
    "FlatProcess",
    "FunctionProcess",
    "EEToMuMuProcess",
    "register",
    "get_process",
    "list_registered_processes",
]
