"""Application layer for fnpack.

Services orchestrate packaging through port interfaces; concrete filesystem,
process and host access lives in adapters.
"""

__all__ = [
    "ArtifactDistributor",
    "CompileResult",
    "PackagingMode",
    "PackagingResult",
    "PackagingService",
]

from fnpack.app.distribution import ArtifactDistributor
from fnpack.app.models import CompileResult, PackagingMode
from fnpack.app.packaging_service import PackagingResult, PackagingService
