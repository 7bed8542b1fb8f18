"""Built-in spec locations and known webhook event catalogs.

Some providers publish webhook events only in their docs, not in the
OpenAPI spec. Those catalogs live here and are merged into the generated
triggers.
"""

from __future__ import annotations

import json
from pathlib import Path

from .errors import FetchError

# OpenAPI spec sources for major providers
OPENAPI_SOURCES: dict[str, str] = {
    "stripe": "https://raw.githubusercontent.com/stripe/openapi/master/openapi/spec3.json",
    "twilio": "https://raw.githubusercontent.com/twilio/twilio-oai/main/spec/json/twilio_api_v2010.json",
    "sendgrid": "https://raw.githubusercontent.com/sendgrid/sendgrid-oai/main/oai.json",
}

# Display names used when none is given on the command line
PROVIDER_NAMES: dict[str, str] = {
    "stripe": "Stripe",
    "twilio": "Twilio",
    "sendgrid": "SendGrid",
}

STRIPE_WEBHOOK_EVENTS: tuple[str, ...] = (
    # Account
    "account.updated", "account.application.authorized", "account.application.deauthorized",
    "account.external_account.created", "account.external_account.deleted", "account.external_account.updated",

    # Application fee
    "application_fee.created", "application_fee.refunded", "application_fee.refund.updated",

    # Balance
    "balance.available",

    # Billing portal
    "billing_portal.configuration.created", "billing_portal.configuration.updated",
    "billing_portal.session.created",

    # Charge
    "charge.captured", "charge.expired", "charge.failed", "charge.pending", "charge.refunded",
    "charge.succeeded", "charge.updated",
    "charge.dispute.closed", "charge.dispute.created", "charge.dispute.funds_reinstated",
    "charge.dispute.funds_withdrawn", "charge.dispute.updated",
    "charge.refund.updated",

    # Checkout
    "checkout.session.async_payment_failed", "checkout.session.async_payment_succeeded",
    "checkout.session.completed", "checkout.session.expired",

    # Coupon
    "coupon.created", "coupon.deleted", "coupon.updated",

    # Credit note
    "credit_note.created", "credit_note.updated", "credit_note.voided",

    # Customer
    "customer.created", "customer.deleted", "customer.updated",
    "customer.discount.created", "customer.discount.deleted", "customer.discount.updated",
    "customer.source.created", "customer.source.deleted", "customer.source.expiring", "customer.source.updated",
    "customer.subscription.created", "customer.subscription.deleted", "customer.subscription.paused",
    "customer.subscription.pending_update_applied", "customer.subscription.pending_update_expired",
    "customer.subscription.resumed", "customer.subscription.trial_will_end", "customer.subscription.updated",
    "customer.tax_id.created", "customer.tax_id.deleted", "customer.tax_id.updated",

    # File
    "file.created",

    # Invoice
    "invoice.created", "invoice.deleted", "invoice.finalization_failed", "invoice.finalized",
    "invoice.marked_uncollectible", "invoice.paid", "invoice.payment_action_required",
    "invoice.payment_failed", "invoice.payment_succeeded", "invoice.sent",
    "invoice.upcoming", "invoice.updated", "invoice.voided",
    "invoiceitem.created", "invoiceitem.deleted",

    # Issuing
    "issuing_authorization.created", "issuing_authorization.updated",
    "issuing_card.created", "issuing_card.updated",
    "issuing_cardholder.created", "issuing_cardholder.updated",
    "issuing_dispute.closed", "issuing_dispute.created", "issuing_dispute.funds_reinstated",
    "issuing_dispute.submitted", "issuing_dispute.updated",
    "issuing_transaction.created", "issuing_transaction.updated",

    # Mandate
    "mandate.updated",

    # Payment intent
    "payment_intent.amount_capturable_updated", "payment_intent.canceled", "payment_intent.created",
    "payment_intent.partially_funded", "payment_intent.payment_failed", "payment_intent.processing",
    "payment_intent.requires_action", "payment_intent.succeeded",

    # Payment link
    "payment_link.created", "payment_link.updated",

    # Payment method
    "payment_method.attached", "payment_method.automatically_updated", "payment_method.detached",
    "payment_method.updated",

    # Payout
    "payout.canceled", "payout.created", "payout.failed", "payout.paid",
    "payout.reconciliation_completed", "payout.updated",

    # Person
    "person.created", "person.deleted", "person.updated",

    # Plan
    "plan.created", "plan.deleted", "plan.updated",

    # Price
    "price.created", "price.deleted", "price.updated",

    # Product
    "product.created", "product.deleted", "product.updated",

    # Promotion code
    "promotion_code.created", "promotion_code.updated",

    # Quote
    "quote.accepted", "quote.canceled", "quote.created", "quote.finalized",

    # Radar
    "radar.early_fraud_warning.created", "radar.early_fraud_warning.updated",

    # Refund
    "refund.created", "refund.updated",

    # Reporting
    "reporting.report_run.failed", "reporting.report_run.succeeded",
    "reporting.report_type.updated",

    # Review
    "review.closed", "review.opened",

    # Setup intent
    "setup_intent.canceled", "setup_intent.created", "setup_intent.requires_action",
    "setup_intent.setup_failed", "setup_intent.succeeded",

    # Sigma
    "sigma.scheduled_query_run.created",

    # Source
    "source.canceled", "source.chargeable", "source.failed",
    "source.mandate_notification", "source.refund_attributes_required",
    "source.transaction.created", "source.transaction.updated",

    # Subscription schedule
    "subscription_schedule.aborted", "subscription_schedule.canceled", "subscription_schedule.completed",
    "subscription_schedule.created", "subscription_schedule.expiring", "subscription_schedule.released",
    "subscription_schedule.updated",

    # Tax rate
    "tax_rate.created", "tax_rate.updated",

    # Terminal
    "terminal.reader.action_failed", "terminal.reader.action_succeeded",

    # Test helpers
    "test_helpers.test_clock.advancing", "test_helpers.test_clock.created",
    "test_helpers.test_clock.deleted", "test_helpers.test_clock.internal_failure",
    "test_helpers.test_clock.ready",

    # Topup
    "topup.canceled", "topup.created", "topup.failed", "topup.reversed", "topup.succeeded",

    # Transfer
    "transfer.created", "transfer.reversed", "transfer.updated",

    # Treasury
    "treasury.credit_reversal.created", "treasury.credit_reversal.posted",
    "treasury.debit_reversal.completed", "treasury.debit_reversal.created",
    "treasury.debit_reversal.initial_credit_granted",
    "treasury.financial_account.closed", "treasury.financial_account.created",
    "treasury.financial_account.features_status_updated",
    "treasury.inbound_transfer.canceled", "treasury.inbound_transfer.created",
    "treasury.inbound_transfer.failed", "treasury.inbound_transfer.succeeded",
    "treasury.outbound_payment.canceled", "treasury.outbound_payment.created",
    "treasury.outbound_payment.expected_arrival_date_updated", "treasury.outbound_payment.failed",
    "treasury.outbound_payment.posted", "treasury.outbound_payment.returned",
    "treasury.outbound_transfer.canceled", "treasury.outbound_transfer.created",
    "treasury.outbound_transfer.expected_arrival_date_updated", "treasury.outbound_transfer.failed",
    "treasury.outbound_transfer.posted", "treasury.outbound_transfer.returned",
    "treasury.received_credit.created", "treasury.received_credit.failed",
    "treasury.received_credit.succeeded",
    "treasury.received_debit.created",
)

KNOWN_EVENTS: dict[str, tuple[str, ...]] = {
    "stripe": STRIPE_WEBHOOK_EVENTS,
}


def load_events_file(path: Path) -> list[str]:
    """Read known events from a JSON array or a newline-separated text file.

    Blank lines and lines starting with # are ignored in text files.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise FetchError(str(path), str(exc)) from exc

    if text.lstrip().startswith("["):
        try:
            events = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FetchError(str(path), f"invalid JSON: {exc}") from exc
        if not isinstance(events, list) or not all(isinstance(e, str) for e in events):
            raise FetchError(str(path), "expected a JSON array of event names")
        return events

    return [
        line.strip() for line in text.splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]
