"""Initialisation state machine for the repository loader."""

from __future__ import annotations

from repo_loader.domain.entities import LoaderState
from repo_loader.domain.exceptions import InvalidStateTransitionError

# state -> (next state on success, next state on failure)
_TRANSITIONS: dict[LoaderState, tuple[LoaderState, LoaderState | None]] = {
    LoaderState.UNINITIALIZED: (LoaderState.URL_VALIDATED, LoaderState.NOT_READY),
    LoaderState.URL_VALIDATED: (LoaderState.BRANCH_RESOLVED, None),
    LoaderState.BRANCH_RESOLVED: (LoaderState.TOKEN_CHECKED, None),
    LoaderState.TOKEN_CHECKED: (LoaderState.READY, None),
}


def advance(state: LoaderState, succeeded: bool = True) -> LoaderState:
    """Return the state that follows *state* after one ``init`` step.

    Only URL validation can fail; the later steps always degrade to a usable
    value, so a failure from any other state is a programming error.
    """
    try:
        on_success, on_failure = _TRANSITIONS[state]
    except KeyError:
        raise InvalidStateTransitionError(
            f"No transition out of terminal state '{state.value}'."
        ) from None

    if succeeded:
        return on_success
    if on_failure is None:
        raise InvalidStateTransitionError(
            f"Step after '{state.value}' cannot fail."
        )
    return on_failure
