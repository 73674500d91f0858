"""
DCPU-16 Architecture Package
"""
from .cpu import Dcpu16Cpu
from .state import Dcpu16CpuState
