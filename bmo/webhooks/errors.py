"""Admission denials raised by the resource webhooks."""

from __future__ import annotations

from typing import List


class AdmissionError(Exception):
    """Base class for a denied admission request."""

    code = 403


class SubscriptionInvalidError(AdmissionError):
    """
    One or more fields of a new subscription failed validation.

    The message aggregates every violation the way Kubernetes does: a single
    error is shown as is, several are listed in brackets.
    """

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        if len(self.errors) == 1:
            message = self.errors[0]
        else:
            message = "[" + ", ".join(self.errors) + "]"
        super().__init__(message)


class SubscriptionImmutableError(AdmissionError):
    def __init__(self) -> None:
        super().__init__("subscriptions cannot be updated, please recreate it")


class MalformedObjectError(AdmissionError):
    """The submitted object is not a readable BMCEventSubscription."""

    code = 400
