"""srcdst ドメインモデルパッケージ。"""

from srcdst.models._base import SrcDstBaseModel
from srcdst.models.config import SrcDstConfig
from srcdst.models.exit_code import ExitCode
from srcdst.models.locator import (
    FileLocator,
    InputLocator,
    OutputLocator,
    ResolvedPair,
    StdinLocator,
    StdoutLocator,
)
from srcdst.models.plan import PairingPlan, PairingStrategy
from srcdst.models.shape import STREAM_SENTINEL, Shape

__all__ = [
    "STREAM_SENTINEL",
    "ExitCode",
    "FileLocator",
    "InputLocator",
    "OutputLocator",
    "PairingPlan",
    "PairingStrategy",
    "ResolvedPair",
    "Shape",
    "SrcDstBaseModel",
    "SrcDstConfig",
    "StdinLocator",
    "StdoutLocator",
]
