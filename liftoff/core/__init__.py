from liftoff.core.activity import is_inactive
from liftoff.core.display import compute_switch_instant, select_launch
from liftoff.core.planner import WakeKind, Wakeup, plan_wakeups
from liftoff.core.timefmt import format_relative

__all__ = [
    "WakeKind",
    "Wakeup",
    "compute_switch_instant",
    "format_relative",
    "is_inactive",
    "plan_wakeups",
    "select_launch",
]
