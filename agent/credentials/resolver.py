from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from botocore.utils import ArnParser

from agent.errors import ConfigurationError
from common.settings import DEFAULT_TIMEOUT_SECONDS
from common.utils.logging_setup import setup_logger

logger = setup_logger(__name__)

ROLE_SESSION_NAME = "dx-vif-agent"

SessionFactory = Callable[..., Any]


class CredentialSource(str, Enum):
    ASSUME_ROLE = "assume-role"
    STATIC = "static"
    DEFAULT = "default"


def select_credential_source(
    access_key_id: str, secret_access_key: str, role_arn: str
) -> CredentialSource:
    """
    An assumed role always wins over a static key pair; a half-configured
    key pair falls through to the default provider chain.
    """
    if role_arn:
        return CredentialSource.ASSUME_ROLE
    if access_key_id and secret_access_key:
        return CredentialSource.STATIC
    return CredentialSource.DEFAULT


def resolve_cloudwatch_client(
    access_key_id: str = "",
    secret_access_key: str = "",
    role_arn: str = "",
    region: str = "",
    *,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
    session_factory: SessionFactory = boto3.session.Session,
):
    """
    Build an authenticated CloudWatch client.

    Raises ConfigurationError when no usable client can be produced; callers
    must not query metrics in that case.
    """
    if timeout < 1:
        raise ConfigurationError(
            f"Request timeout must be at least 1 second, got {timeout}"
        )

    source = select_credential_source(access_key_id, secret_access_key, role_arn)
    region_name: Optional[str] = region or None
    logger.debug("Resolving AWS credentials (source=%s).", source.value)

    try:
        if source is CredentialSource.ASSUME_ROLE:
            session = _assume_role_session(
                role_arn, region_name, timeout, session_factory
            )
        elif source is CredentialSource.STATIC:
            session = session_factory(
                aws_access_key_id=access_key_id,
                aws_secret_access_key=secret_access_key,
                region_name=region_name,
            )
        else:
            session = session_factory(region_name=region_name)

        if session.get_credentials() is None:
            raise ConfigurationError("No AWS credentials could be found")
        if not session.region_name:
            raise ConfigurationError("No AWS region configured")

        return session.client("cloudwatch", config=_client_config(timeout))
    except (BotoCoreError, ClientError, ValueError) as exc:
        raise ConfigurationError(f"AWS client setup failed: {exc}") from exc


def _assume_role_session(
    role_arn: str,
    region_name: Optional[str],
    timeout: int,
    session_factory: SessionFactory,
):
    try:
        ArnParser().parse_arn(role_arn)
    except ValueError as exc:
        raise ConfigurationError(f"Malformed role ARN {role_arn!r}: {exc}") from exc

    base_session = session_factory(region_name=region_name)
    sts = base_session.client("sts", config=_client_config(timeout))
    response = sts.assume_role(RoleArn=role_arn, RoleSessionName=ROLE_SESSION_NAME)
    credentials = response["Credentials"]
    logger.debug(
        "Assumed role %s (expires %s).", role_arn, credentials.get("Expiration")
    )

    return session_factory(
        aws_access_key_id=credentials["AccessKeyId"],
        aws_secret_access_key=credentials["SecretAccessKey"],
        aws_session_token=credentials["SessionToken"],
        region_name=region_name or base_session.region_name,
    )


def _client_config(timeout: int) -> Config:
    # no retries: the next scheduled plugin run is the retry
    return Config(
        connect_timeout=timeout,
        read_timeout=timeout,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )
