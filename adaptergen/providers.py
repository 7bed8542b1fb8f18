"""Static per-provider metadata that OpenAPI specs don't express uniformly.

Authentication fields, rate limits and webhook signing details are looked
up by provider slug. The registry is read-only; pass a different mapping to
resolve_provider() to override entries.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class AuthField:
    name: str
    label: str
    type: str = "text"
    required: bool = False
    placeholder: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "type": self.type,
            "required": self.required,
        }
        if self.placeholder is not None:
            data["placeholder"] = self.placeholder
        return data


@dataclass(frozen=True)
class AuthConfig:
    type: str = "api_key"
    fields: tuple[AuthField, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "fields": [f.to_dict() for f in self.fields]}


@dataclass(frozen=True)
class WebhookConfig:
    supported: bool = False
    signature_header: str | None = None
    signature_algorithm: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if not self.supported:
            return {"supported": False}
        return {
            "supported": True,
            "signatureHeader": self.signature_header,
            "signatureAlgorithm": self.signature_algorithm,
        }


@dataclass(frozen=True)
class ProviderMetadata:
    """Everything about a provider that the generator can't read from its spec."""

    type: str = "custom"
    website: str = ""
    documentation: str = ""
    authentication: AuthConfig = field(default_factory=AuthConfig)
    rate_limit: Mapping[str, int] = field(
        default_factory=lambda: MappingProxyType({"requestsPerMinute": 60}),
    )
    webhooks: WebhookConfig = field(default_factory=WebhookConfig)

    def rate_limit_dict(self) -> dict[str, int]:
        return dict(self.rate_limit)


DEFAULT_PROVIDER = ProviderMetadata()


PROVIDERS: Mapping[str, ProviderMetadata] = MappingProxyType({
    "stripe": ProviderMetadata(
        type="payment",
        website="https://stripe.com",
        documentation="https://stripe.com/docs/api",
        authentication=AuthConfig(fields=(
            AuthField("secret_key", "Secret Key", "password", True, "sk_live_..."),
            AuthField("publishable_key", "Publishable Key", "text", False, "pk_live_..."),
            AuthField("webhook_secret", "Webhook Signing Secret", "password", False, "whsec_..."),
        )),
        rate_limit=MappingProxyType({"requestsPerMinute": 100, "requestsPerSecond": 25}),
        webhooks=WebhookConfig(True, "stripe-signature", "hmac-sha256"),
    ),
    "twilio": ProviderMetadata(
        type="sms",
        website="https://twilio.com",
        documentation="https://www.twilio.com/docs/api",
        authentication=AuthConfig(fields=(
            AuthField("account_sid", "Account SID", "text", True),
            AuthField("auth_token", "Auth Token", "password", True),
        )),
        rate_limit=MappingProxyType({"requestsPerMinute": 100}),
        webhooks=WebhookConfig(True, "x-twilio-signature", "hmac-sha1"),
    ),
    "sendgrid": ProviderMetadata(
        type="email",
        website="https://sendgrid.com",
        documentation="https://docs.sendgrid.com/api-reference",
        authentication=AuthConfig(fields=(
            AuthField("api_key", "API Key", "password", True),
        )),
        rate_limit=MappingProxyType({"requestsPerMinute": 600}),
        webhooks=WebhookConfig(True, "x-twilio-email-event-webhook-signature", "ecdsa"),
    ),
    "docusign": ProviderMetadata(
        type="esignature",
        website="https://docusign.com",
        documentation="https://developers.docusign.com/docs",
    ),
    "xero": ProviderMetadata(
        type="accounting",
        website="https://xero.com",
        documentation="https://developer.xero.com/documentation",
    ),
    "sumsub": ProviderMetadata(
        type="kyc",
        website="https://sumsub.com",
        documentation="https://docs.sumsub.com",
    ),
})


def resolve_provider(
    slug: str,
    providers: Mapping[str, ProviderMetadata] = PROVIDERS,
) -> ProviderMetadata:
    """Look up provider metadata, falling back to generic defaults."""
    return providers.get(slug, DEFAULT_PROVIDER)
