################################################################################
# MIT License

# Copyright (c) 2025 Advanced Micro Devices, Inc. All Rights Reserved.

# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:

# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.

# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
################################################################################

"""Collector that owns recorded benchmarks and dumps them."""

import atexit
import sys
import threading
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Tuple

from mango_profiling.config import ProfilerConfig
from mango_profiling.core import report
from mango_profiling.core.benchmark import (
	Benchmark,
	BufferBenchmark,
	KernelBenchmark,
	Parameters,
	ResourceBenchmark,
	SampleBenchmark,
)
from mango_profiling.exceptions import ProfileWriteError
from mango_profiling.logger import logger


class Profiler:
	"""
	Records timed buffer, kernel and resource events plus one optional sample.

	Every ``start_*`` method creates an event, stores it and returns it as a
	handle the caller finishes. The profiler keeps ownership: :meth:`dump`
	prints a summary, saves a JSON file when allowed and forgets every event.
	Handles finished after a dump no longer show up anywhere.

	Usage:
	    profiler = Profiler(ProfilerConfig(output_directory="profiles"))
	    sample = profiler.start_sample_benchmark("gemm", [("iter", "10")])
	    with profiler.start_kernel_execution(7):
	        launch()
	    sample.mark_success().finish()
	    profiler.dump()
	"""

	def __init__(self, config: Optional[ProfilerConfig] = None, stream: Optional[TextIO] = None):
		"""
		Initialize the profiler

		Args:
		    config: Output settings, defaults to ProfilerConfig()
		    stream: Where the summary is printed, defaults to sys.stdout at dump time
		"""
		self.config = config or ProfilerConfig()
		self.stream = stream
		self._lock = threading.Lock()
		self._buffer_reads: List[BufferBenchmark] = []
		self._buffer_writes: List[BufferBenchmark] = []
		self._kernel_executions: List[KernelBenchmark] = []
		self._resource_allocations: List[ResourceBenchmark] = []
		self._resource_deallocations: List[ResourceBenchmark] = []
		self._sample: Optional[SampleBenchmark] = None
		# Nothing recorded yet, so there is nothing a teardown dump could add
		self.all_dumped = True

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc, tb):
		self.close()
		return False

	def __del__(self):
		"""Dump on destruction if the owner never did"""
		try:
			if hasattr(self, "_lock"):
				self.close()
		except Exception:
			# Ignore any errors during interpreter teardown
			pass

	def _record(self, events: List[Benchmark], event: Benchmark) -> Benchmark:
		with self._lock:
			events.append(event)
			self.all_dumped = False
		logger.debug(f"Started {event!r}")
		return event

	def start_buffer_read(self, buffer_id: int, size: int) -> BufferBenchmark:
		return self._record(self._buffer_reads, BufferBenchmark(buffer_id, size))

	def start_buffer_write(self, buffer_id: int, size: int) -> BufferBenchmark:
		return self._record(self._buffer_writes, BufferBenchmark(buffer_id, size))

	def start_kernel_execution(self, kernel_id: int) -> KernelBenchmark:
		return self._record(self._kernel_executions, KernelBenchmark(kernel_id))

	def start_resource_allocation(self, kernel_amount: int, buffer_amount: int, event_amount: int) -> ResourceBenchmark:
		return self._record(
			self._resource_allocations, ResourceBenchmark(kernel_amount, buffer_amount, event_amount)
		)

	def start_resource_deallocation(
		self, kernel_amount: int, buffer_amount: int, event_amount: int
	) -> ResourceBenchmark:
		return self._record(
			self._resource_deallocations, ResourceBenchmark(kernel_amount, buffer_amount, event_amount)
		)

	def start_sample_benchmark(self, name: str, parameters: Parameters = ()) -> SampleBenchmark:
		"""
		Start the sample run, replacing the current one.

		A replaced sample is dropped without being reported.
		"""
		sample = SampleBenchmark(name, parameters)
		with self._lock:
			previous = self._sample
			self._sample = sample
			self.all_dumped = False
		if previous is not None:
			logger.debug(f"Sample '{previous.name}' replaced by '{name}' before being dumped")
		return sample

	def _categories(self) -> Dict[str, List[Benchmark]]:
		return {
			"buffer_reads": self._buffer_reads,
			"buffer_writes": self._buffer_writes,
			"kernel_executions": self._kernel_executions,
			"resource_allocations": self._resource_allocations,
			"resource_deallocations": self._resource_deallocations,
		}

	@property
	def sample(self) -> Optional[SampleBenchmark]:
		return self._sample

	@property
	def buffer_reads(self) -> Tuple[BufferBenchmark, ...]:
		return tuple(self._buffer_reads)

	@property
	def buffer_writes(self) -> Tuple[BufferBenchmark, ...]:
		return tuple(self._buffer_writes)

	@property
	def kernel_executions(self) -> Tuple[KernelBenchmark, ...]:
		return tuple(self._kernel_executions)

	@property
	def resource_allocations(self) -> Tuple[ResourceBenchmark, ...]:
		return tuple(self._resource_allocations)

	@property
	def resource_deallocations(self) -> Tuple[ResourceBenchmark, ...]:
		return tuple(self._resource_deallocations)

	def dump(self) -> Optional[Path]:
		"""
		Print the summary, save the JSON file and clear every recorded event.

		The file is only written when there is no sample or the sample is
		finished; an in-flight sample still gets its summary printed. Write
		failures are logged, never raised.

		Returns:
		    Path of the saved file, or None when nothing was written
		"""
		with self._lock:
			sample = self._sample
			categories = {key: list(events) for key, events in self._categories().items()}
			self._sample = None
			for events in self._categories().values():
				events.clear()
			self.all_dumped = True

		document = report.build_document(sample, categories)
		stream = self.stream or sys.stdout
		for line in report.render_summary(document, sample.parameters if sample is not None else None):
			print(line, file=stream)

		if not self.config.save_to_file:
			logger.debug("Saving to file disabled, skipping profiling file")
			return None
		if sample is not None and not sample.finished:
			logger.debug(f"Sample '{sample.name}' is not finished, skipping profiling file")
			return None

		try:
			filepath = report.save_profile(document, self.config.output_directory, self.config.file_prefix)
		except ProfileWriteError as e:
			logger.error(str(e))
			return None
		print(f"Profiling file saved at: {filepath}", file=stream)
		return filepath

	def close(self):
		"""Dump once if events were recorded since the last dump."""
		if self.all_dumped:
			return
		try:
			self.dump()
		except Exception as e:
			logger.error(f"Final profiling dump failed: {e}")


_profiler: Optional[Profiler] = None
_profiler_lock = threading.Lock()
_exit_hook_registered = False


def _close_process_profiler():
	if _profiler is not None:
		_profiler.close()


def _create_process_profiler(config: ProfilerConfig, stream: Optional[TextIO] = None) -> Profiler:
	# Only the process profiler owns the package log level
	logger.set_level(config.log_level)
	_register_exit_hook()
	return Profiler(config, stream)


def _register_exit_hook():
	global _exit_hook_registered
	if not _exit_hook_registered:
		atexit.register(_close_process_profiler)
		_exit_hook_registered = True


def init_profiler(config: Optional[ProfilerConfig] = None, stream: Optional[TextIO] = None) -> Profiler:
	"""
	Create the process-wide profiler.

	An existing process profiler is closed first. The new one is dumped at
	interpreter exit unless it was dumped already.

	Args:
	    config: Output settings, defaults to ProfilerConfig.from_env()
	    stream: Where summaries are printed
	"""
	global _profiler
	with _profiler_lock:
		previous = _profiler
		_profiler = _create_process_profiler(config or ProfilerConfig.from_env(), stream)
		current = _profiler
	if previous is not None:
		previous.close()
	return current


def get_profiler() -> Profiler:
	"""Return the process-wide profiler, creating it from the environment on first use."""
	global _profiler
	with _profiler_lock:
		if _profiler is None:
			_profiler = _create_process_profiler(ProfilerConfig.from_env())
		return _profiler


def shutdown_profiler():
	"""Close the process-wide profiler and forget it."""
	global _profiler
	with _profiler_lock:
		profiler = _profiler
		_profiler = None
	if profiler is not None:
		profiler.close()
