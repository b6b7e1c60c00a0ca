"""Attribute values as decoded from a batch request."""

from __future__ import annotations

from dataclasses import dataclass

from batchguard.core.enums import Operator


@dataclass
class AttributeValue:
    """
    One attribute (or ``attribute.resource``) value from a batch request.

    Built by the request-decoding layer and handed to
    :func:`~batchguard.verification.registry.verify`. Verifiers never mutate
    it; the registry replaces ``value`` only when a verifier accepts a
    rewritten form.

    Attributes:
        name: Attribute name, e.g. ``Hold_Types`` or ``Resource_List``
        value: Raw value string; None when the request carried no value
        resource: Resource name for resource-list attributes, else None
        op: Operator; only select-type requests compare with it
    """

    name: str
    value: str | None = None
    resource: str | None = None
    op: Operator = Operator.SET

    @property
    def qualified_name(self) -> str:
        if self.resource:
            return f"{self.name}.{self.resource}"
        return self.name

    def is_blank(self) -> bool:
        """True for a missing or empty value."""
        return self.value is None or self.value == ""
