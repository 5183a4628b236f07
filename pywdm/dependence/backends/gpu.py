"""
GPU backend for matrices of pairwise dependence measures using PyTorch.

Performance path for wide data: the weighted Pearson matrix is a single
weighted cross-product, and Spearman is the same on weighted ranks (ranks
are computed on the CPU). Kendall, Blomqvist, Hoeffding, and any data
with missing values fall back to the CPU reference backend.

FP32 by default. Returns FP64 numpy arrays for consistency with the CPU
reference backend.
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import NDArray

from pywdm.core.result import Result
from pywdm.core.compute.timing import Timer
from pywdm.core.compute.device import DeviceInfo
from pywdm.dependence._common import MeasureKind, MIN_OBSERVATIONS
from pywdm.dependence._ranks import weighted_rank
from pywdm.dependence.backends.cpu import CPUDependenceBackend
from pywdm.dependence.design import DependenceMatrixDesign
from pywdm.dependence.solution import DependenceMatrixParams


GPU_MEASURES = (MeasureKind.PEARSON, MeasureKind.SPEARMAN)


class GPUDependenceBackend:
    """
    GPU backend for wdm_mat().

    Accelerates Pearson and Spearman matrices on complete data. Every
    other request is delegated to CPUDependenceBackend, and the result's
    backend_name says which backend actually ran.
    """

    def __init__(self, device: DeviceInfo | None = None):
        """
        Parameters
        ----------
        device : DeviceInfo, optional
            Device info from select_device(). If None, auto-selects.
        """
        import torch

        if device is not None:
            if device.device_type == 'cuda':
                self.device = torch.device(f'cuda:{device.device_index or 0}')
            elif device.device_type == 'mps':
                self.device = torch.device('mps')
            else:
                raise ValueError(
                    f"GPUDependenceBackend requires GPU device, got {device.device_type}"
                )
        elif torch.cuda.is_available():
            self.device = torch.device('cuda')
        elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
            self.device = torch.device('mps')
        else:
            raise RuntimeError("No GPU available. Use backend='cpu' instead.")

        self.dtype = torch.float32
        self._cpu = CPUDependenceBackend()

    @property
    def name(self) -> str:
        return 'gpu_dependence_fp32'

    def supports(self, design: DependenceMatrixDesign) -> bool:
        """Whether the design can run on the GPU path."""
        return (
            design.kind in GPU_MEASURES
            and not design.has_missing
            and design.n >= MIN_OBSERVATIONS[design.kind]
        )

    def solve_matrix(self, design: DependenceMatrixDesign) -> Result[DependenceMatrixParams]:
        """Pairwise measure matrix on GPU, or on CPU when unsupported."""
        if not self.supports(design):
            return self._cpu.solve_matrix(design)

        import torch

        timer = Timer(sync_cuda=self.device.type == 'cuda')
        timer.start()

        data = design.data
        weights = design.weights if len(design.weights) > 0 else None

        if design.kind is MeasureKind.SPEARMAN:
            with timer.section('ranks'):
                data = np.column_stack([
                    weighted_rank(data[:, j], weights) for j in range(design.p)
                ])

        with timer.section('data_transfer_to_gpu'):
            x_gpu = torch.from_numpy(np.ascontiguousarray(data)).to(
                device=self.device, dtype=self.dtype,
            )
            if weights is None:
                w_gpu = torch.ones(design.n, device=self.device, dtype=self.dtype)
            else:
                w_gpu = torch.from_numpy(np.array(weights)).to(
                    device=self.device, dtype=self.dtype,
                )

        with timer.section('pearson_matrix'):
            matrix = self._weighted_cor(x_gpu, w_gpu)

        # float32 centering does not cancel exactly on constant columns
        support = data if weights is None else data[weights > 0]
        constant = np.ptp(support, axis=0) == 0 if len(support) > 0 else np.ones(design.p, bool)
        matrix[constant, :] = np.nan
        matrix[:, constant] = np.nan
        np.fill_diagonal(matrix, 1.0)

        timer.stop()

        warnings_list: list[str] = []
        n_undefined = int(np.isnan(matrix).sum()) // 2
        if n_undefined:
            warnings_list.append(
                f"{n_undefined} of {design.p * (design.p - 1) // 2} column pairs "
                f"have an undefined {design.kind.value} measure (NaN)"
            )

        return Result(
            params=DependenceMatrixParams(kind=design.kind, matrix=matrix),
            info={'method': design.kind.value, 'n': design.n, 'p': design.p},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

    @staticmethod
    def _weighted_cor(x_gpu, w_gpu) -> NDArray[np.floating[Any]]:
        """Weighted Pearson correlation matrix of the columns of x_gpu."""
        import torch

        total = torch.sum(w_gpu)
        if float(total) == 0.0:
            p = x_gpu.shape[1]
            matrix = np.full((p, p), np.nan)
            np.fill_diagonal(matrix, 1.0)
            return matrix

        w = w_gpu / total
        centered = x_gpu - w @ x_gpu
        cov = centered.T @ (w[:, None] * centered)
        sd = torch.sqrt(torch.diagonal(cov))

        # zero-variance columns give NaN, as on the CPU
        cor = cov / torch.outer(sd, sd)
        cor = torch.clamp(cor, -1.0, 1.0)
        matrix = cor.cpu().numpy().astype(np.float64)
        np.fill_diagonal(matrix, 1.0)
        return matrix
