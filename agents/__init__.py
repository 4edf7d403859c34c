"""
Agents package.

Modules:
- designer: design a quantized SRRC coefficient set and emit a validated filters config
- sim: run the cycle-accurate model on a stimulus and cross-check against the golden model
"""

__all__ = ["designer", "sim"]
