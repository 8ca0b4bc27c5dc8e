"""
Form state for the login and registration screens.

Each form owns its field values, its field errors and one SubmissionState.
The Streamlit pages keep a form instance in st.session_state and forward
widget edits and button clicks to it; nothing here draws anything.

Submission lifecycle:

    Idle -> Submitting -> Succeeded | Failed

Succeeded and Failed go back to Idle on the next edit or submit.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from app.storage import TOKEN_KEY, get_client_storage
from app.validation import (
    validate_email,
    validate_nic,
    validate_password_length,
    validate_password_match,
    validate_required,
)

logger = logging.getLogger(__name__)

SWITCH_TO_LOGIN_DELAY_SECONDS = 2.0

FIELD_LABELS = {
    "username": "Username",
    "email": "Email",
    "password": "Password",
    "confirmPassword": "Confirm Password",
    "nicNumber": "NIC Number",
}


class Status(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionState:
    status: Status = Status.IDLE
    message: str = ""

    @classmethod
    def idle(cls):
        return cls(Status.IDLE)

    @classmethod
    def submitting(cls):
        return cls(Status.SUBMITTING)

    @classmethod
    def succeeded(cls, message: str):
        return cls(Status.SUCCEEDED, message)

    @classmethod
    def failed(cls, message: str):
        return cls(Status.FAILED, message)

    @property
    def error(self) -> str:
        return self.message if self.status is Status.FAILED else ""

    @property
    def success(self) -> str:
        return self.message if self.status is Status.SUCCEEDED else ""


class AuthForm:
    """Fields, field errors and submission state shared by both forms."""

    fields: tuple = ()

    def __init__(self):
        self.values = {name: "" for name in self.fields}
        self.field_errors = {}
        self.state = SubmissionState.idle()

    @property
    def busy(self) -> bool:
        return self.state.status is Status.SUBMITTING

    def edit(self, name: str, value: str) -> None:
        """Record a keystroke-level change to one field."""
        if name not in self.values:
            raise KeyError(f"Unknown field: {name}")
        self.values[name] = value
        if self.state.status in (Status.SUCCEEDED, Status.FAILED):
            self.state = SubmissionState.idle()
        self._revalidate(name)

    def _revalidate(self, name: str) -> None:
        self.field_errors.pop(name, None)

    def validate(self) -> dict:
        """Run every local rule. Returns {field: message} for failures."""
        raise NotImplementedError

    def can_submit(self) -> bool:
        return not self.busy and not any(self.field_errors.values())

    def payload(self) -> dict:
        raise NotImplementedError

    def reset(self) -> None:
        self.values = {name: "" for name in self.fields}
        self.field_errors = {}

    def submit(self, send: Callable[[dict], dict]) -> SubmissionState:
        """
        Validate, then hand the payload to send.

        send returns a result dict as produced by app.auth.sign_in/sign_up.
        Nothing is sent while another submission is in flight or while a
        local rule fails.
        """
        if self.busy:
            logger.debug("%s: submission already in flight, ignoring", type(self).__name__)
            return self.state

        self.state = SubmissionState.idle()
        errors = self.validate()
        self.field_errors = dict(errors)
        if errors:
            return self.state

        self.state = SubmissionState.submitting()
        try:
            result = send(self.payload())
        except Exception:
            self.state = SubmissionState.idle()
            raise

        if result.get("success"):
            self.state = SubmissionState.succeeded(result.get("message", ""))
            self._on_success(result)
        else:
            self.state = SubmissionState.failed(result.get("error", ""))
        return self.state

    def _on_success(self, result: dict) -> None:
        pass


class LoginForm(AuthForm):
    fields = ("username", "password", "nicNumber")

    def __init__(self, storage=None):
        super().__init__()
        self._storage = storage
        self.token = ""

    def _revalidate(self, name: str) -> None:
        if name == "nicNumber":
            error = validate_nic(self.values[name])
            if error:
                self.field_errors[name] = error
            else:
                self.field_errors.pop(name, None)
        else:
            self.field_errors.pop(name, None)

    def validate(self) -> dict:
        errors = {}
        for name in ("username", "password"):
            error = validate_required(self.values[name], FIELD_LABELS[name])
            if error:
                errors[name] = error
        # re-checked here in case the widget never fired a change
        nic_error = validate_nic(self.values["nicNumber"])
        if nic_error:
            errors["nicNumber"] = nic_error
        return errors

    def payload(self) -> dict:
        return {
            "username": self.values["username"].strip(),
            "password": self.values["password"],
            "nicNumber": self.values["nicNumber"].strip(),
        }

    def _on_success(self, result: dict) -> None:
        self.token = result["token"]
        storage = self._storage or get_client_storage()
        storage.set(TOKEN_KEY, self.token)
        logger.info("Stored session token for %s", self.values["username"].strip())


class RegistrationForm(AuthForm):
    """
    Registration form.

    identifier picks the account field ('email' or 'username');
    require_nic adds the NIC field and its check. On success the fields
    are cleared and on_switch_to_login is scheduled after
    SWITCH_TO_LOGIN_DELAY_SECONDS via schedule(delay, callback).
    """

    def __init__(
        self,
        identifier: str = "email",
        require_nic: bool = False,
        on_switch_to_login: Optional[Callable[[], None]] = None,
        schedule: Optional[Callable[[float, Callable[[], None]], None]] = None,
        storage=None,
    ):
        if identifier not in ("email", "username"):
            raise ValueError(f"identifier must be 'email' or 'username', got {identifier!r}")
        self.identifier = identifier
        self.require_nic = require_nic
        self.fields = (identifier, "password", "confirmPassword") + (("nicNumber",) if require_nic else ())
        self.on_switch_to_login = on_switch_to_login
        self.schedule = schedule
        self._storage = storage
        super().__init__()

    def _revalidate(self, name: str) -> None:
        if name in ("password", "confirmPassword"):
            self.field_errors.pop("password", None)
            self.field_errors.pop("confirmPassword", None)
        elif name == "nicNumber":
            error = validate_nic(self.values[name])
            if error:
                self.field_errors[name] = error
            else:
                self.field_errors.pop(name, None)
        else:
            self.field_errors.pop(name, None)

    def validate(self) -> dict:
        errors = {}
        for name in self.fields:
            if name == "nicNumber":
                continue
            error = validate_required(self.values[name], FIELD_LABELS[name])
            if error:
                errors[name] = error
        if errors:
            return errors

        password = self.values["password"]
        mismatch = validate_password_match(password, self.values["confirmPassword"])
        if mismatch:
            return {"confirmPassword": mismatch}
        too_short = validate_password_length(password)
        if too_short:
            return {"password": too_short}

        if self.require_nic:
            nic_error = validate_nic(self.values["nicNumber"])
            if nic_error:
                errors["nicNumber"] = nic_error
        if self.identifier == "email":
            email_error = validate_email(self.values["email"])
            if email_error:
                errors["email"] = email_error
        return errors

    def payload(self) -> dict:
        body = {
            self.identifier: self.values[self.identifier].strip(),
            "password": self.values["password"],
        }
        if self.require_nic:
            body["nicNumber"] = self.values["nicNumber"].strip()
        return body

    def _on_success(self, result: dict) -> None:
        if result.get("token"):
            storage = self._storage or get_client_storage()
            storage.set(TOKEN_KEY, result["token"])
        self.reset()
        if self.on_switch_to_login and self.schedule:
            self.schedule(SWITCH_TO_LOGIN_DELAY_SECONDS, self.on_switch_to_login)
