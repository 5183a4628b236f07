"""
Hardware detection and device selection.

Only the matrix of pairwise measures has a GPU path; everything else is
CPU-only. torch is imported lazily so the CPU path never pays for it.
"""

from dataclasses import dataclass
from typing import Literal
import platform

from pywdm.core.exceptions import ValidationError


@dataclass(frozen=True)
class DeviceInfo:
    """
    Information about a compute device.

    Attributes:
        device_type: Type of device ('cpu', 'cuda', 'mps')
        device_index: Device index (None for CPU)
        name: Human-readable device name
    """
    device_type: Literal['cpu', 'cuda', 'mps']
    device_index: int | None
    name: str

    def __str__(self) -> str:
        if self.device_type == 'cpu':
            return f"CPU ({self.name})"
        return f"{self.device_type.upper()}:{self.device_index} ({self.name})"

    @property
    def is_gpu(self) -> bool:
        """True if this is a GPU device."""
        return self.device_type in ('cuda', 'mps')


def detect_gpu() -> DeviceInfo | None:
    """
    Detect the best available GPU, CUDA first, then Apple MPS.

    Returns None when torch is missing or no GPU is present.
    """
    try:
        import torch
    except ImportError:
        return None

    if torch.cuda.is_available():
        idx = torch.cuda.current_device()
        return DeviceInfo(
            device_type='cuda',
            device_index=idx,
            name=torch.cuda.get_device_properties(idx).name,
        )

    if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
        return DeviceInfo(device_type='mps', device_index=0, name='Apple Silicon GPU')

    return None


def get_cpu_info() -> DeviceInfo:
    """DeviceInfo for the host CPU."""
    processor = platform.processor() or platform.machine() or "Unknown CPU"
    return DeviceInfo(device_type='cpu', device_index=None, name=processor)


def select_device(prefer: Literal['cpu', 'gpu', 'auto'] = 'auto') -> DeviceInfo:
    """
    Select compute device based on preference and availability.

    Args:
        prefer: 'cpu' always uses the CPU, 'gpu' requires a GPU,
            'auto' uses a GPU when one is available.

    Raises:
        RuntimeError: If 'gpu' requested but no GPU available
        ValidationError: If prefer is not a known choice
    """
    if prefer == 'cpu':
        return get_cpu_info()
    if prefer not in ('gpu', 'auto'):
        raise ValidationError(
            f"Unknown backend: {prefer!r}. Use 'auto', 'cpu' or 'gpu'."
        )

    gpu = detect_gpu()

    if prefer == 'gpu' and gpu is None:
        raise RuntimeError(
            "GPU requested but no GPU available. "
            "Ensure PyTorch is installed with CUDA/MPS support."
        )

    return gpu if gpu is not None else get_cpu_info()
