"""Dashboard core: config, publishing state, cycle scheduling, and diagnostics."""

from .bootstrap import BootstrapResolver
from .config import AppConfig, load_config, validate_config
from .controller import ControllerStatus, CyclePhase, CycleResult, DashboardController
from .diagnostics import DiagnosticsExporter, build_doctor_payload
from .errors import (
    ChannelNotFoundError,
    ChatError,
    CollectionError,
    ConfigError,
    MessageNotFoundError,
    PublishError,
    RenderError,
)
from .publisher import DashboardPublisher, DashboardState, PublishResult
from .service import DashboardService, ServiceState

__all__ = [
    "AppConfig",
    "BootstrapResolver",
    "ChannelNotFoundError",
    "ChatError",
    "CollectionError",
    "ConfigError",
    "ControllerStatus",
    "CyclePhase",
    "CycleResult",
    "DashboardController",
    "DashboardPublisher",
    "DashboardService",
    "DashboardState",
    "DiagnosticsExporter",
    "MessageNotFoundError",
    "PublishError",
    "PublishResult",
    "RenderError",
    "ServiceState",
    "build_doctor_payload",
    "load_config",
    "validate_config",
]
