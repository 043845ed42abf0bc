"""Route services: stopover suggestion and route snapshot computation."""

from .route_service import (  # noqa: F401
    RouteTracker,
    compute_route_data,
    stopover_progress_positions,
)
from .stopover_service import (  # noqa: F401
    SearchState,
    SearchStep,
    helper_positions,
    ideal_segment_count,
    next_search_step,
    normalize_max_stopovers,
    suggest_stopovers,
)
