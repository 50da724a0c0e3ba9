"""
noty: a stacked snackbar queue for PySide6 applications.

The queue core (controller, state, messages, render plan) is free of Qt;
the overlay, popup, scheduler and bundled adapters build on PySide6.
"""

from .controller import SnackbarController  # noqa: F401
from .listeners import ChangeNotifier  # noqa: F401
from .message import SnackbarMessage, SnackbarMixin, default_duration  # noqa: F401
from .render import AnimationConfig, RenderEntry, RenderPlan, build_render_plan  # noqa: F401
from .settings import NotySettings, SettingsManager  # noqa: F401
from .state import SnackbarState  # noqa: F401
from .types import (  # noqa: F401
    Insets,
    SnackbarAction,
    SnackbarPriority,
    SnackbarType,
    StackAlignment,
)

__version__ = "1.0.0"
