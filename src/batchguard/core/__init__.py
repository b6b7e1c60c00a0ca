"""batchguard.core -- errors, results, enums, settings and logging.

Architecture::

    errors.py      Error codes, text table and VerificationError hierarchy
    result.py      Result[T] envelope (Ok / Err)
    enums.py       RequestKind, ObjectKind, Command, Operator
    settings.py    VerifierSettings (pydantic-settings, BATCHGUARD_* env)
    logging.py     structlog configuration and LogContext
"""
