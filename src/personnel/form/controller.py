"""
Form session controller - dispatches form events to handlers

Each session keeps its people in its own in-memory store, listed in creation order.
"""

import logging
from typing import Optional

from personnel.database.memory_store import InMemoryPersonStore
from personnel.form.reducer import reduce
from personnel.form.state import (
    CancelRequested, DeleteRequested, DeleteSucceeded, EditRequested, EditTargetMissing, FieldChanged,
    FormState, OperationFailed, RecordsLoaded, SubmitRejected, SubmitRequested, SubmitSucceeded
)
from personnel.services.people_service import PeopleService

logger = logging.getLogger(__name__)


class FormController:
    """Drives one registration form session against a people service"""

    def __init__(self, service: PeopleService, state: Optional[FormState] = None):
        self.service = service
        self.state = state or FormState()

        # Event type to handler mapping
        self._handlers = {
            FieldChanged: self._apply,
            EditRequested: self._apply,
            CancelRequested: self._apply,
            SubmitRequested: self._submit,
            DeleteRequested: self._delete,
        }

    async def dispatch(self, event) -> FormState:
        """
        Handle one user event and return the resulting state

        Raises:
            ValueError: If the event type has no handler
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise ValueError(f"No handler configured for event: {type(event).__name__}")
        self.state = await handler(event)
        return self.state

    async def refresh(self) -> FormState:
        """Reload the table from the service"""
        result = await self.service.list_people()
        if result.success:
            self.state = reduce(self.state, RecordsLoaded(tuple(result.data)))
        else:
            self.state = reduce(self.state, OperationFailed(result.error))
        return self.state

    async def _apply(self, event) -> FormState:
        return reduce(self.state, event)

    async def _submit(self, event: SubmitRequested) -> FormState:
        editing_id = self.state.editing_id
        if editing_id is None:
            result = await self.service.register_person(self.state.values)
            notice = "Person registered successfully"
        else:
            result = await self.service.update_person(editing_id, self.state.values)
            notice = "Person updated successfully"

        if not result.success:
            if result.error_type == "NOT_FOUND":
                listing = await self.service.list_people()
                return reduce(
                    self.state,
                    EditTargetMissing(tuple(listing.data or ()), "The person being edited no longer exists")
                )
            return reduce(self.state, SubmitRejected(result.errors, notice=result.error))

        listing = await self.service.list_people()
        return reduce(self.state, SubmitSucceeded(tuple(listing.data or ()), notice))

    async def _delete(self, event: DeleteRequested) -> FormState:
        result = await self.service.delete_person(event.record_id)
        if not result.success:
            logger.warning(f"Form delete of person {event.record_id} failed: {result.error}")
            return reduce(self.state, OperationFailed(result.error))

        listing = await self.service.list_people()
        return reduce(
            self.state,
            DeleteSucceeded(event.record_id, tuple(listing.data or ()), "Person deleted successfully")
        )


def new_form_session() -> FormController:
    """Start a form session with its own empty in-memory store"""
    return FormController(PeopleService(InMemoryPersonStore(), newest_first=False))
