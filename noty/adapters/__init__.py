"""
Source adapters that feed messages into a snackbar controller.
"""

from .base import (  # noqa: F401
    AdapterHost,
    CustomSnackbarAdapter,
    SnackbarAdapter,
    add_if_not_exists,
    remove_by_id,
    replace_adapter,
)
from .countdown import CountdownSnackbarAdapter  # noqa: F401
from .network import NetworkSnackbarAdapter  # noqa: F401
