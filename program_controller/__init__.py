from .config import ConfigError, ToolConfig
from .controller import PredictionMismatchError, ProgramController
from .models import LpToken, PoolInfo, PoolLibraries, PoolParseError, PoolType, ProgramDeployment

__all__ = [
    "ConfigError",
    "LpToken",
    "PoolInfo",
    "PoolLibraries",
    "PoolParseError",
    "PoolType",
    "PredictionMismatchError",
    "ProgramController",
    "ProgramDeployment",
    "ToolConfig",
]
