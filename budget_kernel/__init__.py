"""
Budget Kernel

Shared foundation for the shift labor-budget engine:
- Immutable domain value objects (staff, slots, shift days, rate assumptions)
- Injectable clock for deterministic timestamps
- Typed exception hierarchy with machine-readable codes
- Structured JSON logging
"""

__version__ = "0.1.0"
