"""Tests for Chrome trace export and the synthetic capture generator."""

import json

import pytest

from nvtrc.adapters import StringPool, adapt
from nvtrc.demo import CaptureConfig, CaptureGenerator, generate_file_data, write_demo_file
from nvtrc.exporters import to_chrome_trace, write_chrome_trace
from nvtrc.formats import ContextSwitchType, decode, encode, read_file


class TestChromeTrace:
    """Test Chrome trace-event documents."""

    def test_instant_events(self, single_device_data):
        """Each event becomes an instant event relative to the origin."""
        pool = StringPool()
        info, events = adapt(single_device_data, "capture.nvtrc", pool)

        document = to_chrome_trace(info, events, pool)
        trace_events = document["traceEvents"]

        assert len(trace_events) == 2
        assert trace_events[0] == {
            "name": "(event_name:ContextSwitchedIn)",
            "cat": "nvcontext",
            "ph": "i",
            "s": "t",
            "ts": 0.0,
            "pid": 4242,
            "tid": 4242,
        }
        assert trace_events[1]["ts"] == 10.0

    def test_metadata(self, two_device_data):
        """Metadata carries the source file and device label."""
        pool = StringPool()
        info, events = adapt(two_device_data, "two.nvtrc", pool)

        metadata = to_chrome_trace(info, events, pool)["metadata"]
        assert metadata == {
            "source": "two.nvtrc",
            "devices": "nvgpu(GPU A)&nvgpu(GPU B)",
            "origin": 7_000,
        }

    def test_time_divisor(self, single_device_data):
        """Timestamps are divided after the origin is subtracted."""
        pool = StringPool()
        info, events = adapt(single_device_data, "capture.nvtrc", pool)

        document = to_chrome_trace(info, events, pool, time_divisor=4.0)
        assert [e["ts"] for e in document["traceEvents"]] == [0.0, 2.5]

    def test_invalid_divisor(self, single_device_data):
        """Non-positive divisors are rejected."""
        pool = StringPool()
        info, events = adapt(single_device_data, "capture.nvtrc", pool)
        with pytest.raises(ValueError):
            to_chrome_trace(info, events, pool, time_divisor=0)

    def test_write_file(self, tmp_path, single_device_data):
        """The written file is valid JSON with every event."""
        pool = StringPool()
        info, events = adapt(single_device_data, "capture.nvtrc", pool)
        path = tmp_path / "trace.json"

        count = write_chrome_trace(path, info, events, pool, indent=2)

        assert count == 2
        document = json.loads(path.read_text())
        assert len(document["traceEvents"]) == 2


class TestCaptureGenerator:
    """Test synthetic captures."""

    def test_shape(self):
        """Requested device and record counts are honored."""
        data = generate_file_data(device_count=3, records_per_device=10)

        assert data.device_count == 3
        assert [len(r) for r in data.per_device_data] == [10, 10, 10]

    def test_deterministic(self):
        """The same seed yields the same capture."""
        assert generate_file_data(seed=7) == generate_file_data(seed=7)
        assert generate_file_data(seed=7) != generate_file_data(seed=8)

    def test_records_alternate_and_stay_in_window(self):
        """Records alternate in/out inside the device's GPU window."""
        config = CaptureConfig(records_per_device=50)
        data = CaptureGenerator(seed=1).generate(config)
        desc = data.device_descs[0]
        records = data.per_device_data[0]

        assert records[0].switch_type is ContextSwitchType.CONTEXT_SWITCHED_IN
        assert records[1].switch_type is ContextSwitchType.CONTEXT_SWITCHED_OUT
        for record in records:
            assert desc.gpu_timestamp_start <= record.timestamp <= desc.gpu_timestamp_end
        for earlier, later in zip(records, records[1:]):
            assert earlier.timestamp < later.timestamp

    def test_roundtrip(self):
        """Generated captures encode and decode losslessly."""
        data = generate_file_data(device_count=2, records_per_device=25)
        assert decode(encode(data)) == data

    def test_write_demo_file(self, tmp_path):
        """write_demo_file() writes a readable capture."""
        path = tmp_path / "demo.nvtrc"
        data = write_demo_file(path, device_count=2, records_per_device=5)
        assert read_file(path) == data
