"""
Registration form session: immutable state, pure reducer and event dispatch
"""

from personnel.form.controller import FormController, new_form_session
from personnel.form.reducer import reduce
from personnel.form.state import (
    CancelRequested, DeleteRequested, EditRequested, FieldChanged, FormState, Mode, SubmitRequested
)

__all__ = [
    "FormController",
    "new_form_session",
    "reduce",
    "FormState",
    "Mode",
    "FieldChanged",
    "EditRequested",
    "CancelRequested",
    "SubmitRequested",
    "DeleteRequested",
]
