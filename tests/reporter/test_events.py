"""Tests for the background event reporter."""

import io
import threading
import pytest

from solar_app.contract.address import Address
from solar_app.contract.repository import DeployedContract
from solar_app.errors import ReporterClosedError
from solar_app.reporter import (
    ContractConfirmed,
    DeployFailed,
    DeployFinished,
    DeployStarted,
    EventReporter,
)
from solar_app.reporter.events import render_event


class TestEventReporter:
    """Test EventReporter lifecycle and ordering."""

    def test_events_handled_in_arrival_order(self):
        handled = []
        reporter = EventReporter(handler=handled.append)
        reporter.start()

        for i in range(100):
            reporter.report(i)

        assert reporter.close(timeout=5)
        assert handled == list(range(100))

    def test_close_drains_queued_events(self):
        release = threading.Event()
        handled = []

        def slow_handler(event):
            release.wait(timeout=5)
            handled.append(event)

        reporter = EventReporter(handler=slow_handler)
        reporter.start()
        reporter.report("first")
        reporter.report("second")
        release.set()

        assert reporter.close(timeout=5)
        assert handled == ["first", "second"]
        assert reporter.get_stats()["processed"] == 2

    def test_report_after_close(self):
        reporter = EventReporter(handler=lambda event: None)
        reporter.start()
        reporter.close(timeout=5)

        assert reporter.closed
        with pytest.raises(ReporterClosedError):
            reporter.report("late")

    def test_close_is_idempotent(self):
        reporter = EventReporter(handler=lambda event: None)
        reporter.start()

        assert reporter.close(timeout=5)
        assert reporter.close(timeout=5)

    def test_handler_error_does_not_stop_loop(self):
        handled = []

        def handler(event):
            if event == "bad":
                raise RuntimeError("cannot render")
            handled.append(event)

        reporter = EventReporter(handler=handler)
        reporter.start()
        reporter.report("ok-1")
        reporter.report("bad")
        reporter.report("ok-2")

        assert reporter.close(timeout=5)
        assert handled == ["ok-1", "ok-2"]
        assert reporter.get_stats()["errors"] == 1

    def test_concurrent_producers(self):
        handled = []
        reporter = EventReporter(handler=handled.append)
        reporter.start()

        def produce(producer_id):
            for i in range(50):
                reporter.report((producer_id, i))

        threads = [threading.Thread(target=produce, args=(p,)) for p in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert reporter.close(timeout=5)
        assert len(handled) == 8 * 50
        for producer_id in range(8):
            sequence = [i for p, i in handled if p == producer_id]
            assert sequence == list(range(50))

    def test_default_handler_prints_to_stream(self):
        stream = io.StringIO()
        reporter = EventReporter(stream=stream)
        reporter.start()
        reporter.report(DeployStarted(deploy_name="Token", platform="ethereum"))
        reporter.report({"raw": 1})

        assert reporter.close(timeout=5)
        assert stream.getvalue().splitlines() == [
            "deploy Token (ethereum)",
            "{'raw': 1}",
        ]


class TestEventRendering:
    """Test rendering of deployment events."""

    def test_render_untyped_value(self):
        assert render_event(42) == "42"

    def test_render_deploy_events(self):
        contract = DeployedContract(
            name="Token",
            deploy_name="Token",
            address=Address.from_hex("0abc"),
            txid="ff",
        )

        assert render_event(DeployFinished(contract=contract)) == "deployed Token => 0abc (txid ff)"
        assert render_event(DeployFailed(deploy_name="Token", error="boom")) == "deploy Token failed: boom"
        assert render_event(ContractConfirmed(deploy_name="Token")) == "confirmed Token"
