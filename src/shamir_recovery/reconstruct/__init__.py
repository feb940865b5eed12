from .coordinator import (
    ReconstructionCoordinator,
    ReconstructionResult,
    alternative_subsets,
    reconstruct,
    recover_secret,
    select_points,
)

__all__ = [
    "ReconstructionCoordinator",
    "ReconstructionResult",
    "alternative_subsets",
    "reconstruct",
    "recover_secret",
    "select_points",
]
