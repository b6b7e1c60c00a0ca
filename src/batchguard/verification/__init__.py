"""Attribute verification engine.

Architecture::

    registry.py    VerifierKind, attribute identity map, verify()
    context.py     VerificationContext (request identity + injected limits)
    attributes.py  AttributeValue
    resource.py    Definition-driven resource verifier
    scalar.py      Fixed-grammar, enumerated and numeric verifiers
    acl.py         Manager/operator ACL verifier (host resolution)
    select.py      Select specification verifier
    preempt.py     Preemption-target verifier
    reporter.py    Error message synthesis
"""
