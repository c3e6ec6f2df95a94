"""View state shared with the presentation layer."""

from bp_tracker.state.coordinator import ReadingCoordinator, ViewState
from bp_tracker.state.observable import Observable

__all__ = ["Observable", "ReadingCoordinator", "ViewState"]
