from .record import HolterData, Metadata, Signal

__all__ = [
    "HolterData",
    "Metadata",
    "Signal",
]
