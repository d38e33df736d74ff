"""Pipeline stages"""

from .s0_reception import Receiver
from .s1_profiling import Profiler

__all__ = [
    "Receiver",
    "Profiler",
]
