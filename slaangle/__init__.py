"""Top-level package for the SLA angle calculator.

The package converts a resin printer's pixel pitch and a layer height into
the tilt angle that avoids pixel stair-stepping, and lays out the diagrams
that illustrate it.  The browser page and the HTTP API are thin hosts around
:func:`slaangle.engine.derive`.
"""

from .config import CalculatorSettings, InputState, Printer
from .engine import Derived, DerivationEngine, derive
from .controller import CalculatorController

__all__ = [
    "CalculatorSettings",
    "InputState",
    "Printer",
    "Derived",
    "DerivationEngine",
    "derive",
    "CalculatorController",
]
