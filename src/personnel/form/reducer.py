"""
Pure state transitions for the registration form

Idle --edit--> Editing(id); Editing --submit ok / cancel--> Idle;
Idle --submit ok--> Idle. A rejected submit keeps mode and values.
"""

from dataclasses import replace

from personnel.form.state import (
    CancelRequested, DeleteSucceeded, EditRequested, EditTargetMissing, FieldChanged, FormState,
    OperationFailed, RecordsLoaded, SubmitRejected, SubmitSucceeded, empty_values
)


def _cleared(state: FormState, **changes) -> FormState:
    """Back to Idle with an empty form"""
    return replace(state, values=empty_values(), errors={}, editing_id=None, **changes)


def reduce(state: FormState, event) -> FormState:
    """
    Apply one event to the form state

    Args:
        state: Current state
        event: A user event (field change, edit, cancel) or a service outcome

    Returns:
        The next state; the input state is never modified
    """
    if isinstance(event, FieldChanged):
        if event.field not in state.values:
            raise ValueError(f"Unknown form field: {event.field}")
        values = {**state.values, event.field: event.value}
        # Editing a field clears its error
        errors = {name: message for name, message in state.errors.items() if name != event.field}
        return replace(state, values=values, errors=errors, notice=None)

    if isinstance(event, EditRequested):
        return replace(
            state,
            values=event.record.to_candidate(),
            errors={},
            editing_id=event.record.id,
            notice=None
        )

    if isinstance(event, CancelRequested):
        return _cleared(state, notice=None)

    if isinstance(event, SubmitSucceeded):
        return _cleared(state, records=tuple(event.records), notice=event.notice)

    if isinstance(event, SubmitRejected):
        return replace(state, errors=dict(event.errors), notice=event.notice)

    if isinstance(event, DeleteSucceeded):
        if state.editing_id == event.record_id:
            return _cleared(state, records=tuple(event.records), notice=event.notice)
        return replace(state, records=tuple(event.records), notice=event.notice)

    if isinstance(event, EditTargetMissing):
        return _cleared(state, records=tuple(event.records), notice=event.notice)

    if isinstance(event, RecordsLoaded):
        return replace(state, records=tuple(event.records))

    if isinstance(event, OperationFailed):
        return replace(state, notice=event.notice)

    raise ValueError(f"Unsupported form event: {type(event).__name__}")
