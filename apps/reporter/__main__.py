from __future__ import annotations

import argparse
import logging
import threading

from adapters.host import StaticHostPort
from pydantic import ValidationError
from shared.config.loader import load_reporter_settings
from shared.errors import ConfigurationError

from apps.reporter.compose import build_agent


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="support-metrics-reporter")
    ap.add_argument("--profile", help="Config profile name (default: $PSR_PROFILE or dev).")
    ap.add_argument("--once", action="store_true", help="Submit a single report and exit.")
    ap.add_argument("--host-version", default="unknown", help="Version reported for the host.")
    ap.add_argument("--verbose", action="store_true", help="Log per-request detail.")
    ap.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    args = ap.parse_args(argv)

    level = logging.WARNING if args.quiet else logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("reporter")

    try:
        settings = load_reporter_settings(profile=args.profile)
        agent = build_agent(settings, StaticHostPort(ready=True), args.host_version)
    except (ConfigurationError, ValidationError) as ex:
        log.error("Invalid reporter configuration: %s", ex)
        return 2
    if agent is None or not agent.is_reporting_enabled():
        return 2

    if args.once:
        if agent.log_channel is not None:
            agent.log_channel.provision()
        results = agent.submit_metrics()
        log.info("Submission results: %s", results or "skipped")
        return 0 if any(results.values()) else 1

    agent.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        log.info("Shutting down...")
    finally:
        agent.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
