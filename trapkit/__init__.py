"""Model of a small bare-metal machine: C-style helpers, devices, I/O layer, test programs and demos."""

__version__ = "0.1.0"

__all__ = [
    "algorithms",
    "arith",
    "cstring",
    "demos",
    "devices",
    "formatting",
    "int64",
    "ioe",
    "mmio",
    "runtime",
]