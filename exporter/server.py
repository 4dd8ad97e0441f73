from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import uuid
from pathlib import Path
from typing import List, Optional

from flask import Flask, Response
from prometheus_client import CONTENT_TYPE_LATEST

from .config import ExporterConfig, load_config
from .errors import ConfigLoadError, SessionInitError
from .executor import ActionDispatcher, ExecutionOutcome, RunExecutor
from .plan_loader import load_plan
from .reporter import PrometheusSink, ResultReporter
from .session import open_session
from .structured_logging import open_event_log

log = logging.getLogger("exporter")


def create_app(sink: PrometheusSink) -> Flask:
    app = Flask(__name__)

    @app.get("/metrics")
    def metrics():
        return Response(sink.exposition(), content_type=CONTENT_TYPE_LATEST)

    @app.get("/healthz")
    def health():
        return "ok", 200

    return app


async def run_check(config: ExporterConfig, reporter: ResultReporter) -> ExecutionOutcome:
    """Load the plan, run it once against a fresh browser and report the verdict.

    :class:`ConfigLoadError` and :class:`SessionInitError` propagate; step
    failures only degrade the reported outcome.
    """

    plan = load_plan(config.plan_path)
    run_id = uuid.uuid4().hex[:8]
    events = open_event_log(run_id, config.events_path)
    try:
        executor = RunExecutor(ActionDispatcher(strict=config.strict_actions), events=events)
        async with open_session(config) as session:
            outcome = await executor.run(plan, session)
    finally:
        if events is not None:
            events.close()
    reporter.report(config.test_name, outcome)
    return outcome


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a browser check once and export its result to Prometheus")
    parser.add_argument("--config", type=Path, help="TOML file with an [exporter] table")
    parser.add_argument("--plan", dest="plan_path", help="YAML file with the check steps")
    parser.add_argument("--test-name", dest="test_name", help="Value of the test_name label")
    parser.add_argument("--host", help="Address the metrics server binds to")
    parser.add_argument("--port", type=int, help="Port of the metrics server")
    parser.add_argument(
        "--strict",
        dest="strict_actions",
        action="store_true",
        default=None,
        help="Fail steps that name no navigate/input/click action",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config).with_overrides(
            plan_path=args.plan_path,
            test_name=args.test_name,
            host=args.host,
            port=args.port,
            strict_actions=args.strict_actions,
        )
    except ConfigLoadError as exc:
        log.error("Failed to load configuration: %s", exc)
        return 1
    logging.getLogger().setLevel(config.log_level)

    sink = PrometheusSink()
    reporter = ResultReporter(sink)
    try:
        outcome = asyncio.run(run_check(config, reporter))
    except ConfigLoadError as exc:
        log.error("Failed to load check plan: %s", exc)
        return 1
    except SessionInitError as exc:
        log.error("Failed to initialise browser session: %s", exc)
        return 1
    log.info("Check '%s' finished: %s", config.test_name, outcome.state.value)

    app = create_app(sink)
    log.info("Serving metrics on %s:%d/metrics", config.host, config.port)
    app.run(config.host, config.port, threaded=True)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run helper
    sys.exit(main())
