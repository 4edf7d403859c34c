"""
Cycle-accurate, bit-exact model of a 23-tap symmetric SRRC FIR datapath.

Modules:
- fixed: two's-complement wrap, bit windows, Q formats
- register: clocked register with asynchronous clear, register banks
- history, coeffs, symsum, multiply, adder_tree, output: pipeline stages
- core: runtime-coefficient datapath (SymmetricFirCore)
- top: fixed-coefficient facade (SrrcFir)
- probe: width monitor
"""

from .core import PipelineState, SymmetricFirCore
from .probe import WidthMonitor
from .top import SrrcFir

__all__ = ["PipelineState", "SrrcFir", "SymmetricFirCore", "WidthMonitor"]
