"""Input-layer public API for key decoding and key bindings.

Exports are split between low-level terminal decoding (`read_key`) and the
binding table the runtime loop consults for each key.
"""

from .bindings import DEFAULT_BINDINGS, BindingTable, KeyBinding, coerce_bindings
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "BindingTable",
    "DEFAULT_BINDINGS",
    "KeyBinding",
    "coerce_bindings",
]
