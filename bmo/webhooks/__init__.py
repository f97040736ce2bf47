"""Admission webhooks for metal3.io resources."""

from bmo.webhooks.errors import AdmissionError, SubscriptionImmutableError, SubscriptionInvalidError
from bmo.webhooks.subscription import BMCEventSubscription

__all__ = ['AdmissionError', 'BMCEventSubscription', 'SubscriptionImmutableError', 'SubscriptionInvalidError']
