from .resolver import (
    CredentialSource,
    resolve_cloudwatch_client,
    select_credential_source,
)

__all__ = [
    "CredentialSource",
    "resolve_cloudwatch_client",
    "select_credential_source",
]
