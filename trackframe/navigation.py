"""Manual navigation tracking.

While the user steps through individual points the camera follows their
selection instead of re-fitting to the whole track. The state is an immutable
value handed into and returned from every recomputation.
"""

from __future__ import annotations

from typing import Optional

from .models import LatLng, NavigationState


def sync_source(state: Optional[NavigationState], source_key: tuple) -> NavigationState:
    """Clear the navigating flag when the points or the mode have changed.

    The last selected point is remembered across the reset so that a selection
    still being supplied from before the change is not replayed as a new one.
    """
    if state is None:
        return NavigationState(source_key=source_key)
    if state.source_key != source_key:
        return NavigationState(last_selected_point=state.last_selected_point, source_key=source_key)
    return state


def is_new_selection(state: NavigationState, selected_point: Optional[LatLng]) -> bool:
    return selected_point is not None and selected_point != state.last_selected_point


def select_point(state: NavigationState, point: LatLng) -> NavigationState:
    return NavigationState(
        is_manually_navigating=True,
        last_selected_point=point,
        source_key=state.source_key,
    )


def release_selection(state: NavigationState) -> NavigationState:
    """Forget the selected point once the caller stops supplying one.

    The navigating flag is kept, so the camera still is not re-fitted, but
    selecting the same point again pans to it.
    """
    if state.last_selected_point is None:
        return state
    return NavigationState(
        is_manually_navigating=state.is_manually_navigating,
        source_key=state.source_key,
    )
