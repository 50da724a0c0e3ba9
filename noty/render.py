"""
Pure layout of the snackbar stack.

Turns the ordered message list into per-message placement and styling so any
backend can draw it. Timing and easing live in :class:`AnimationConfig` as
plain data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from noty.message import SnackbarMessage
from noty.types import Insets, SnackbarPriority, SnackbarType, StackAlignment

SEVERITY_COLORS: Dict[SnackbarType, str] = {
    SnackbarType.INFO: "#2196f3",
    SnackbarType.SUCCESS: "#4caf50",
    SnackbarType.WARNING: "#ff9800",
    SnackbarType.ERROR: "#f44336",
    SnackbarType.LOADING: "#2196f3",
}

SEVERITY_ICONS: Dict[SnackbarType, str] = {
    SnackbarType.INFO: "info",
    SnackbarType.SUCCESS: "success",
    SnackbarType.WARNING: "warning",
    SnackbarType.ERROR: "error",
    SnackbarType.LOADING: "loading",
}

DEFAULT_PADDING = Insets.all(16.0)


@dataclass(frozen=True)
class AnimationConfig:
    duration_ms: int = 300
    easing: str = "InOutQuad"
    entry_scale: float = 0.8
    entry_opacity: float = 0.0
    stack_spacing: float = 70.0
    scale_step: float = 0.05
    max_scale_reduction: float = 0.3
    opacity_step: float = 0.15
    min_opacity: float = 0.3
    darken_step: float = 0.1
    base_elevation: int = 6


@dataclass(frozen=True)
class RenderEntry:
    """Placement and styling of one visible message at stack depth ``index``."""

    index: int
    message: SnackbarMessage
    top: Optional[float]
    bottom: Optional[float]
    left: Optional[float]
    right: Optional[float]
    scale: float
    opacity: float
    background: str
    elevation: int
    slide_from: float
    emphasised: bool
    icon: str

    @property
    def message_id(self) -> str:
        return self.message.id

    @property
    def show_close_button(self) -> bool:
        return self.message.persistent

    @property
    def dismiss_on_tap(self) -> bool:
        return self.message.dismiss_on_tap


@dataclass(frozen=True)
class RenderPlan:
    alignment: StackAlignment
    entries: Tuple[RenderEntry, ...] = ()
    config: AnimationConfig = field(default_factory=AnimationConfig)

    @property
    def visible_ids(self) -> List[str]:
        return [entry.message_id for entry in self.entries]

    def entry_for(self, message_id: str) -> Optional[RenderEntry]:
        for entry in self.entries:
            if entry.message_id == message_id:
                return entry
        return None


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def lerp_to_black(hex_color: str, t: float) -> str:
    """Interpolate ``#rrggbb`` toward black by fraction ``t`` (0..1)."""
    t = _clamp(t, 0.0, 1.0)
    raw = hex_color.lstrip("#")
    channels = [int(raw[i : i + 2], 16) for i in (0, 2, 4)]
    mixed = [round(c * (1.0 - t)) for c in channels]
    return "#" + "".join(f"{c:02x}" for c in mixed)


def target_scale(index: int, config: AnimationConfig) -> float:
    return 1.0 - _clamp(index * config.scale_step, 0.0, config.max_scale_reduction)


def target_opacity(index: int, config: AnimationConfig) -> float:
    return _clamp(1.0 - index * config.opacity_step, config.min_opacity, 1.0)


def build_entry(
    message: SnackbarMessage,
    index: int,
    alignment: StackAlignment,
    *,
    padding: Insets = DEFAULT_PADDING,
    safe_area: Insets = Insets(),
    config: AnimationConfig = AnimationConfig(),
) -> RenderEntry:
    offset = index * config.stack_spacing
    if alignment.is_top:
        top, bottom = safe_area.top + padding.top + offset, None
    else:
        top, bottom = None, safe_area.bottom + padding.bottom + offset
    if alignment.is_left:
        left, right = padding.left, None
    else:
        left, right = None, padding.right

    return RenderEntry(
        index=index,
        message=message,
        top=top,
        bottom=bottom,
        left=left,
        right=right,
        scale=target_scale(index, config),
        opacity=target_opacity(index, config),
        background=lerp_to_black(SEVERITY_COLORS[message.type], index * config.darken_step),
        elevation=config.base_elevation + index,
        slide_from=-1.0 if alignment.is_left else 1.0,
        emphasised=message.priority is SnackbarPriority.CRITICAL,
        icon=message.icon or SEVERITY_ICONS[message.type],
    )


def build_render_plan(
    messages: Sequence[SnackbarMessage],
    alignment: StackAlignment = StackAlignment.TOP_RIGHT,
    *,
    max_visible: int = 5,
    padding: Insets = DEFAULT_PADDING,
    safe_area: Insets = Insets(),
    config: AnimationConfig = AnimationConfig(),
) -> RenderPlan:
    """Lay out the first ``max_visible`` messages of an already ordered list."""
    visible = list(messages)[: max(0, max_visible)]
    entries = tuple(
        build_entry(message, index, alignment, padding=padding, safe_area=safe_area, config=config)
        for index, message in enumerate(visible)
    )
    return RenderPlan(alignment=alignment, entries=entries, config=config)


@dataclass(frozen=True)
class PlanDiff:
    """What a renderer has to change to go from its current popups to ``plan``."""

    removed: Tuple[str, ...] = ()
    added: Tuple[str, ...] = ()
    replaced: Tuple[str, ...] = ()
    kept: Tuple[str, ...] = ()


def diff_plan(shown: Dict[str, SnackbarMessage], plan: RenderPlan) -> PlanDiff:
    """
    Compare the messages currently on screen with a new plan.

    ``replaced`` lists ids still visible whose message object changed, which
    happens after an update or a re-show of the same id.
    """
    visible = plan.visible_ids
    removed = tuple(message_id for message_id in shown if message_id not in visible)
    added: List[str] = []
    replaced: List[str] = []
    kept: List[str] = []
    for entry in plan.entries:
        previous = shown.get(entry.message_id)
        if previous is None:
            added.append(entry.message_id)
        elif previous is not entry.message:
            replaced.append(entry.message_id)
        else:
            kept.append(entry.message_id)
    return PlanDiff(removed=removed, added=tuple(added), replaced=tuple(replaced), kept=tuple(kept))
