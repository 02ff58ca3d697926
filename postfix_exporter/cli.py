import argparse
import logging

import uvicorn

from .config import get_settings
from .main import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Expose Postfix queue lengths as Prometheus metrics."
    )
    parser.add_argument(
        "--telemetry.address",
        dest="telemetry_address",
        help="Address on which to expose metrics (default :9115).",
    )
    parser.add_argument(
        "--telemetry.endpoint",
        dest="telemetry_endpoint",
        help="Path under which to expose metrics (default /metrics).",
    )
    parser.add_argument(
        "--postfix.queue_root",
        dest="queue_root",
        help="Path to Postfix queue directories (default /var/spool/postfix).",
    )
    parser.add_argument("--log-level", dest="log_level", help="Log level, e.g. INFO or DEBUG.")
    return parser


def load_settings(argv=None):
    args = build_parser().parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    return get_settings().model_copy(update=overrides)


def main(argv=None):
    settings = load_settings(argv)
    logging.basicConfig(level=settings.log_level.upper())
    logger.info("Starting server on %s", settings.telemetry_address)
    uvicorn.run(
        create_app(settings),
        host=settings.listen_host,
        port=settings.listen_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
