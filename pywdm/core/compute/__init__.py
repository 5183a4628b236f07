"""
Shared compute infrastructure for pywdm.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
"""

from pywdm.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pywdm.core.compute.timing import Timer

__all__ = [
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    "Timer",
]
