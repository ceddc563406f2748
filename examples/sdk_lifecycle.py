#!/usr/bin/env python3
"""Simulated SDK lifecycle that records and emits diagnostics.

Walks through an SDK start-up (config download, ID-list sync) followed by a
burst of API calls, logging every emitted diagnostics event through the
reference LoggingEventLogger.

Usage:
    # One-line summaries of each emitted event:
    python sdk_lifecycle.py

    # Full JSON events, with api_call diagnostics sampled at 50%:
    python sdk_lifecycle.py --log-level full --api-call-rate 5000

    # Reproducible sampling decisions:
    python sdk_lifecycle.py --seed 7

Options may also come from the environment:
    export SDK_DIAG_DISABLE_DIAGNOSTICS=true
"""

from __future__ import annotations

import argparse
import logging
import time
import uuid

from sdk_diagnostics import DiagnosticsOptions, LoggingEventLogger, initialize

logger = logging.getLogger("sdk_lifecycle")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--log-level", default="summary", choices=("none", "summary", "full"))
    parser.add_argument("--api-call-rate", type=int, default=10000)
    parser.add_argument("--calls", type=int, default=5)
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")

    options = DiagnosticsOptions(
        log_level=args.log_level,
        random_source_type="seeded" if args.seed is not None else "system",
        random_seed=args.seed,
    )
    diagnostics = initialize(LoggingEventLogger(options), options)

    # --- Initialization ---
    diagnostics.set_context("initialize")
    diagnostics.mark.overall.start()
    diagnostics.mark.download_config_specs.network_request.start()
    time.sleep(0.01)
    diagnostics.mark.download_config_specs.network_request.end(
        success=True, status_code=200, sdk_region="us-west-2"
    )
    diagnostics.mark.download_config_specs.process.start()
    diagnostics.mark.download_config_specs.process.end(success=True)

    marker_id = uuid.uuid4().hex
    diagnostics.mark.get_id_list_sources.process.start(id_list_count=1)
    diagnostics.mark.get_id_list.network_request.start(
        url="https://example.invalid/id_lists/employees", marker_id=marker_id
    )
    diagnostics.mark.get_id_list.network_request.end(
        success=True, status_code=200, marker_id=marker_id
    )
    diagnostics.mark.get_id_list_sources.process.end(success=True)
    diagnostics.mark.overall.end(success=True)
    diagnostics.log_diagnostics("initialize", type="initialize")

    # Server-provided rates arrive after the first config download.
    diagnostics.set_sampling_rate({"api_call": args.api_call_rate, "dcs": 0})

    # --- API calls ---
    mark = diagnostics.scope("api_call")
    for i in range(args.calls):
        api_mark = mark.api_call("checkGate")
        if api_mark is None:
            continue
        call_id = f"checkGate_{i}"
        api_mark.start(marker_id=call_id)
        api_mark.end(marker_id=call_id, success=True, config_name="new_homepage")
        emitted = diagnostics.log_diagnostics("api_call", type="api_call")
        logger.info("call %d emitted=%s", i, emitted)

    diagnostics.close()


if __name__ == "__main__":
    main()
