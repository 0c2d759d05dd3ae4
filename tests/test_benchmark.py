"""
Unit tests for the benchmark event types
"""

from unittest.mock import patch

import pytest

from mango_profiling.core.benchmark import (
	Benchmark,
	BufferBenchmark,
	KernelBenchmark,
	ResourceBenchmark,
	SampleBenchmark,
	SampleResult,
	normalize_parameters,
)

CLOCK = "mango_profiling.core.benchmark.time.perf_counter_ns"


class TestBenchmark:
	"""Test the timed interval shared by all events"""

	def test_new_benchmark_is_not_finished(self):
		with patch(CLOCK, return_value=1_000):
			bench = Benchmark()
		assert bench.start == 1_000
		assert bench.end == bench.start
		assert bench.finished is False
		assert bench.duration_ns == 0

	def test_finish_records_end(self):
		with patch(CLOCK, side_effect=[1_000, 4_500]):
			bench = Benchmark()
			bench.finish()
		assert bench.finished is True
		assert bench.end == 4_500
		assert bench.duration_ns == 3_500

	def test_finish_again_overwrites_end(self):
		with patch(CLOCK, side_effect=[100, 200, 900]):
			bench = Benchmark()
			bench.finish()
			bench.finish()
		assert bench.end == 900
		assert bench.duration_ns == 800

	def test_real_clock_end_not_before_start(self):
		bench = Benchmark()
		assert bench.finish().end >= bench.start

	def test_start_is_read_only(self):
		bench = Benchmark()
		with pytest.raises(AttributeError, match="read-only"):
			bench.start = 0

	def test_context_manager_finishes(self):
		with Benchmark() as bench:
			assert bench.finished is False
		assert bench.finished is True


class TestCategoryBenchmarks:
	"""Test the category specific metadata"""

	def test_buffer_fields(self):
		with patch(CLOCK, side_effect=[10, 35]):
			bench = BufferBenchmark(3, 4096)
			bench.finish()
		assert bench.to_dict() == {"buffer_id": 3, "size": 4096, "duration": 25}

	def test_kernel_fields(self):
		with patch(CLOCK, side_effect=[0, 7]):
			bench = KernelBenchmark(7)
			bench.finish()
		assert bench.to_dict() == {"kernel_id": 7, "duration": 7}

	def test_resource_fields(self):
		with patch(CLOCK, side_effect=[5, 15]):
			bench = ResourceBenchmark(kernel_amount=2, buffer_amount=3, event_amount=4)
			bench.finish()
		assert bench.to_dict() == {"kernel_amount": 2, "buffer_amount": 3, "event_amount": 4, "duration": 10}

	@pytest.mark.parametrize(
		"bench, attribute",
		[
			(BufferBenchmark(1, 2), "buffer_id"),
			(BufferBenchmark(1, 2), "size"),
			(KernelBenchmark(1), "kernel_id"),
			(ResourceBenchmark(1, 2, 3), "event_amount"),
		],
	)
	def test_metadata_is_read_only(self, bench, attribute):
		with pytest.raises(AttributeError):
			setattr(bench, attribute, 99)

	def test_end_stays_writable(self):
		bench = KernelBenchmark(1)
		bench.end = bench.start + 5
		assert bench.duration_ns == 5


class TestSampleBenchmark:
	"""Test the sample outcome tri-state"""

	def test_defaults(self):
		sample = SampleBenchmark("gemm")
		assert sample.parameters == ()
		assert sample.result is SampleResult.UNKNOWN
		assert sample.success is None

	def test_mark_success(self):
		sample = SampleBenchmark("gemm").mark_success()
		assert sample.result is SampleResult.SUCCESS
		assert sample.success is True

	def test_mark_failure(self):
		sample = SampleBenchmark("gemm").mark_failure()
		assert sample.result is SampleResult.FAILURE
		assert sample.success is False

	def test_last_mark_wins(self):
		sample = SampleBenchmark("gemm")
		sample.mark_failure()
		sample.mark_success()
		assert sample.result is SampleResult.SUCCESS

	def test_parameters_keep_order_and_duplicates(self):
		sample = SampleBenchmark("gemm", [("iter", "10"), ("mode", "fast"), ("iter", "20")])
		assert sample.parameters == (("iter", "10"), ("mode", "fast"), ("iter", "20"))
		assert sample.params == {"iter": "20", "mode": "fast"}

	def test_parameters_from_mapping(self):
		sample = SampleBenchmark("gemm", {"iter": 10, "mode": "fast"})
		assert sample.parameters == (("iter", "10"), ("mode", "fast"))

	def test_parameters_are_read_only(self):
		sample = SampleBenchmark("gemm", [("iter", "10")])
		with pytest.raises(AttributeError):
			sample.parameters = ()

	def test_to_dict(self):
		with patch(CLOCK, side_effect=[1_000, 3_000]):
			sample = SampleBenchmark("gemm", [("iter", "10")])
			sample.mark_failure().finish()
		assert sample.to_dict() == {
			"name": "gemm",
			"params": {"iter": "10"},
			"result": "FAILURE",
			"total_duration": 2_000,
		}

	def test_context_manager_marks_success(self):
		with SampleBenchmark("gemm") as sample:
			pass
		assert sample.finished is True
		assert sample.result is SampleResult.SUCCESS

	def test_context_manager_marks_failure_and_reraises(self):
		with pytest.raises(RuntimeError):
			with SampleBenchmark("gemm") as sample:
				raise RuntimeError("kernel crashed")
		assert sample.finished is True
		assert sample.result is SampleResult.FAILURE

	def test_context_manager_keeps_explicit_result(self):
		with SampleBenchmark("gemm") as sample:
			sample.mark_failure()
		assert sample.result is SampleResult.FAILURE


def test_normalize_parameters_none():
	assert normalize_parameters(None) == ()
