from __future__ import annotations

import argparse
import functools
import sys
from typing import Dict, Optional, Sequence

from agent.credentials import resolve_cloudwatch_client
from agent.dx_vif_collector import DxVifCollector
from agent.errors import ConfigurationError
from agent.plugin_output import PluginHelper, graph_definition
from common.settings import PluginConfig, Settings, get_settings
from common.utils.logging_setup import setup_logger

logger = setup_logger("agent")


def _timeout_seconds(value: str) -> int:
    try:
        seconds = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if seconds < 1:
        raise argparse.ArgumentTypeError("must be at least 1 second")
    return seconds


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mackerel-plugin-aws-dx-vif",
        description="Report AWS Direct Connect virtual interface metrics.",
    )
    parser.add_argument(
        "--metric-key-prefix",
        default=settings.metric_key_prefix,
        help="Metric Key Prefix",
    )
    parser.add_argument(
        "--access-key-id", default=settings.access_key_id, help="AWS Access Key ID"
    )
    parser.add_argument(
        "--secret-key-id",
        default=settings.secret_access_key,
        help="AWS Secret Access Key ID",
    )
    parser.add_argument("--region", default=settings.region, help="AWS Region")
    parser.add_argument(
        "--role-arn", default=settings.role_arn, help="IAM Role ARN for assume role"
    )
    parser.add_argument(
        "--virtual-interface-id",
        required=True,
        help="Resource ID of Direct Connect Virtual Interface",
    )
    parser.add_argument(
        "--direct-connect-connection",
        required=True,
        help="Resource ID of Direct Connect",
    )
    parser.add_argument(
        "--timeout",
        type=_timeout_seconds,
        default=settings.request_timeout,
        help="Per-request timeout in seconds",
    )
    return parser


def parse_config(argv: Optional[Sequence[str]] = None) -> PluginConfig:
    args = build_parser(get_settings()).parse_args(argv)
    return PluginConfig(
        metric_key_prefix=args.metric_key_prefix,
        access_key_id=args.access_key_id,
        secret_access_key=args.secret_key_id,
        region=args.region,
        role_arn=args.role_arn,
        virtual_interface_id=args.virtual_interface_id,
        connection_id=args.direct_connect_connection,
        request_timeout=args.timeout,
    )


def fetch_report(config: PluginConfig) -> Dict[str, float]:
    client = resolve_cloudwatch_client(
        config.access_key_id,
        config.secret_access_key,
        config.role_arn,
        config.region,
        timeout=config.request_timeout,
    )
    return DxVifCollector(client, config.resource).fetch_metrics()


def run(config: PluginConfig) -> int:
    # credentials are only resolved when values are requested
    helper = PluginHelper(
        config.key_prefix,
        graph_definition(config.key_prefix),
        fetch=functools.partial(fetch_report, config),
    )
    try:
        helper.run()
    except ConfigurationError as exc:
        logger.critical("%s", exc)
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run(parse_config(argv))


if __name__ == "__main__":
    sys.exit(main())
