"""
State machine behind the product form.

The engine owns the form values and the per-field errors. The page
(or any other caller) only talks to it through four intents:
set_field, blur, submit and reset.
"""
from __future__ import annotations

import enum
import math
from typing import Callable, Optional

from blinker import NamedSignal

from productform.errors import (
    FieldDisabledError,
    SubmissionInProgressError,
    SubmitError,
    UnknownFieldError,
)
from productform.models import FIELD_NAMES, FileRef, FormValues, Option
from productform.utils import log, log_exception
from .forms import validate, validate_field
from .selection import DependentSelectionController


class FormPhase(enum.Enum):
    PRISTINE = 'pristine'
    EDITING = 'editing'
    VALIDATING = 'validating'
    SUBMITTING = 'submitting'
    SUBMITTED = 'submitted'


def log_submission(values):
    """Default submit collaborator: just records what was submitted."""
    log(f"Form Data: {values.as_form_data()}")


# --- Input Coercion ---

def _coerce_text(value):
    return '' if value is None else str(value)


def _coerce_price(value):
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(price) else price


def _coerce_image(value):
    if value is None or isinstance(value, FileRef):
        return value
    raise TypeError(f"product_image must be a FileRef or None, got {type(value).__name__}")


def _coerce_options(value):
    """Strings or Options -> tuple of Options, duplicates removed, order kept."""
    if value is None:
        return ()
    if isinstance(value, (str, Option)):
        value = [value]

    options = []
    seen = set()
    for item in value:
        option = item if isinstance(item, Option) else Option(str(item))
        if option.value not in seen:
            seen.add(option.value)
            options.append(option)
    return tuple(options)


_COERCERS = {
    'product_name': _coerce_text,
    'product_description': _coerce_text,
    'product_image': _coerce_image,
    'product_price': _coerce_price,
    'states': _coerce_options,
    'cities': _coerce_options,
}


class ProductFormEngine:
    """
    Holds the product form values and errors and applies user intents.

    `submitter` is called with a copy of the values once they are valid.
    It should raise SubmitError on failure; any other exception is
    wrapped in one.
    """

    def __init__(self, lookup, submitter: Optional[Callable[[FormValues], None]] = None):
        self.selection = DependentSelectionController(lookup)
        self.submitter = submitter or log_submission

        self.phase = FormPhase.PRISTINE
        self._values = FormValues()
        self._errors: dict[str, str] = {}
        self._dirty: set[str] = set()
        self._touched: set[str] = set()

        # Subscribers get (sender, name=..., value=...) after every set_field
        self.field_changed = NamedSignal('field-changed')
        self.field_changed.connect(self._on_field_changed, sender=self)

    # --- Read side, used by the page ---

    @property
    def values(self) -> FormValues:
        return self._values.copy()

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    def error_for(self, name):
        self._check_name(name)
        return self._errors.get(name)

    @property
    def has_errors(self):
        return bool(self._errors)

    @property
    def touched(self):
        return frozenset(self._touched)

    def is_dirty(self, name=None):
        if name is None:
            return bool(self._dirty)
        self._check_name(name)
        return name in self._dirty

    @property
    def available_cities(self):
        return self.selection.available_cities(self._values.states)

    def state_options(self):
        return self.selection.lookup.state_options()

    def city_options(self):
        return self.selection.city_options(self._values.states)

    def is_disabled(self, name):
        self._check_name(name)
        if name == 'cities':
            return self.selection.is_disabled(self._values.states)
        return False

    def disabled_fields(self):
        return {name: self.is_disabled(name) for name in FIELD_NAMES}

    # --- Intents ---

    def set_field(self, name, value):
        """
        Stores a new value for one field and re-validates just that field.
        Errors of the other fields are left as they are.
        """
        self._check_name(name)
        if self.is_disabled(name):
            raise FieldDisabledError(name)

        value = _COERCERS[name](value)
        if name == 'cities':
            value, dropped = self.selection.prune(self._values.states, value)
            if dropped:
                log(f"Ignoring unavailable cities: {[option.value for option in dropped]}")

        cities_before = self._values.cities
        setattr(self._values, name, value)
        self._dirty.add(name)
        if self.phase is not FormPhase.SUBMITTING:
            self.phase = FormPhase.EDITING

        self.field_changed.send(self, name=name, value=value)

        self._refresh_error(name)
        if name == 'states' and self._values.cities != cities_before:
            self._refresh_error('cities')

    def blur(self, name):
        """Marks the field as touched and re-validates the whole form."""
        self._check_name(name)
        self._touched.add(name)
        self._run_validation()

    def submit(self) -> bool:
        """
        Validates everything and, when valid, hands the values to the submitter.

        Returns False if validation failed (the submitter is not called) and
        True once the submitter succeeded and the form was cleared. A failing
        submitter leaves the values in place and raises SubmitError.
        """
        if self.phase is FormPhase.SUBMITTING:
            raise SubmissionInProgressError("A submission is already in progress")

        self._run_validation()
        if self._errors:
            log(f"Submit blocked, invalid fields: {sorted(self._errors)}")
            self.phase = FormPhase.EDITING
            return False

        self.phase = FormPhase.SUBMITTING
        try:
            self.submitter(self._values.copy())
        except SubmitError:
            self.phase = FormPhase.EDITING
            raise
        except Exception as e:
            self.phase = FormPhase.EDITING
            log_exception("Submit collaborator failed", e)
            raise SubmitError(str(e)) from e

        self._clear()
        self.phase = FormPhase.SUBMITTED
        return True

    def reset(self):
        """Clears values, errors and flags and goes back to PRISTINE."""
        self._clear()
        self.phase = FormPhase.PRISTINE

    # --- Internals ---

    def _on_field_changed(self, sender, name, value):
        if name != 'states':
            return
        # Prune before anything reads `cities` again
        kept, removed = self.selection.prune(value, self._values.cities)
        if removed:
            log(f"Pruned cities no longer available: {[option.value for option in removed]}")
            self._values.cities = kept

    def _run_validation(self):
        previous = self.phase
        self.phase = FormPhase.VALIDATING
        self._errors = validate(self._values)
        # Blurring an untouched form does not start editing
        if previous in (FormPhase.SUBMITTING, FormPhase.PRISTINE):
            self.phase = previous
        else:
            self.phase = FormPhase.EDITING

    def _refresh_error(self, name):
        message = validate_field(name, self._values)
        if message:
            self._errors[name] = message
        else:
            self._errors.pop(name, None)

    def _clear(self):
        self._values = FormValues()
        self._errors = {}
        self._dirty.clear()
        self._touched.clear()

    def _check_name(self, name):
        if name not in FIELD_NAMES:
            raise UnknownFieldError(name)
