"""
progress-list: sequential step execution with progress listeners.

Runs an ordered list of named steps and reports start, progress and
failure to any number of listeners, keeping presentation code out of
the steps themselves.
"""

__version__ = "0.1.0"

from progress_list.config import Config, ConfigManager, ProgressListConfig, config_manager
from progress_list.listener import LoggingListener, ProgressStepListener
from progress_list.progress_list import ProgressList
from progress_list.step import FunctionStep, ProgressStep
from progress_list.tracker import ProgressState, ProgressTracker, StepStage, StepStatus

__all__ = [
    "Config",
    "ConfigManager",
    "FunctionStep",
    "LoggingListener",
    "ProgressList",
    "ProgressListConfig",
    "ProgressState",
    "ProgressStep",
    "ProgressStepListener",
    "ProgressTracker",
    "StepStage",
    "StepStatus",
    "config_manager",
]
