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

"""Timed benchmark events recorded by the profiler."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Tuple, Union


class SampleResult(str, Enum):
	"""Outcome of a sample run."""

	UNKNOWN = "UNKNOWN"
	SUCCESS = "SUCCESS"
	FAILURE = "FAILURE"


@dataclass(eq=False)
class Benchmark:
	"""A single timed interval.

	``start`` is captured at construction and ``end`` equals ``start`` until
	:meth:`finish` is called. Timestamps are ``time.perf_counter_ns()`` values,
	so only differences between them are meaningful.
	"""

	start: int = field(init=False)
	end: int = field(init=False)
	finished: bool = field(default=False, init=False)

	# Fields that cannot be reassigned once set
	_readonly = ("start",)

	def __post_init__(self):
		self.start = time.perf_counter_ns()
		self.end = self.start

	def __setattr__(self, name, value):
		if name in self._readonly and name in self.__dict__:
			raise AttributeError(f"{type(self).__name__}.{name} is read-only")
		super().__setattr__(name, value)

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc, tb):
		self.finish()
		return False

	def finish(self) -> "Benchmark":
		"""Mark the interval as complete.

		Calling it again moves ``end`` to the later timestamp.
		"""
		self.end = time.perf_counter_ns()
		self.finished = True
		return self

	@property
	def duration_ns(self) -> int:
		return self.end - self.start

	def to_dict(self) -> Dict[str, Any]:
		return {"duration": self.duration_ns}


@dataclass(eq=False)
class BufferBenchmark(Benchmark):
	"""A buffer read or write. The holding collection decides which."""

	buffer_id: int
	size: int

	_readonly = ("start", "buffer_id", "size")

	def to_dict(self) -> Dict[str, Any]:
		return {"buffer_id": self.buffer_id, "size": self.size, "duration": self.duration_ns}


@dataclass(eq=False)
class KernelBenchmark(Benchmark):
	"""A single kernel execution."""

	kernel_id: int

	_readonly = ("start", "kernel_id")

	def to_dict(self) -> Dict[str, Any]:
		return {"kernel_id": self.kernel_id, "duration": self.duration_ns}


@dataclass(eq=False)
class ResourceBenchmark(Benchmark):
	"""An allocation or deallocation batch of kernels, buffers and events."""

	kernel_amount: int
	buffer_amount: int
	event_amount: int

	_readonly = ("start", "kernel_amount", "buffer_amount", "event_amount")

	def to_dict(self) -> Dict[str, Any]:
		return {
			"kernel_amount": self.kernel_amount,
			"buffer_amount": self.buffer_amount,
			"event_amount": self.event_amount,
			"duration": self.duration_ns,
		}


Parameters = Union[Mapping[str, Any], Iterable[Tuple[Any, Any]]]


def normalize_parameters(parameters: Parameters) -> Tuple[Tuple[str, str], ...]:
	"""Turn a mapping or a sequence of pairs into a tuple of string pairs.

	Order and duplicate keys are preserved.
	"""
	if parameters is None:
		return ()
	items = parameters.items() if isinstance(parameters, Mapping) else parameters
	return tuple((str(key), str(value)) for key, value in items)


@dataclass(eq=False)
class SampleBenchmark(Benchmark):
	"""An end-to-end sample run with an overall outcome.

	Args:
		name: Sample name, also used in the profiling file name
		parameters: Ordered key/value pairs describing the run
	"""

	name: str
	parameters: Tuple[Tuple[str, str], ...] = ()
	result: SampleResult = field(default=SampleResult.UNKNOWN, init=False)

	_readonly = ("start", "name", "parameters")

	def __post_init__(self):
		super().__post_init__()
		# Bypass the read-only guard for the one-time normalization
		self.__dict__["parameters"] = normalize_parameters(self.parameters)

	def __exit__(self, exc_type, exc, tb):
		if self.result is SampleResult.UNKNOWN:
			if exc_type is None:
				self.mark_success()
			else:
				self.mark_failure()
		return super().__exit__(exc_type, exc, tb)

	def mark_success(self) -> "SampleBenchmark":
		self.result = SampleResult.SUCCESS
		return self

	def mark_failure(self) -> "SampleBenchmark":
		self.result = SampleResult.FAILURE
		return self

	@property
	def success(self):
		"""True/False once an outcome was marked, None while unknown."""
		if self.result is SampleResult.UNKNOWN:
			return None
		return self.result is SampleResult.SUCCESS

	@property
	def params(self) -> Dict[str, str]:
		"""Parameters as a dict; later duplicate keys win."""
		return dict(self.parameters)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"name": self.name,
			"params": self.params,
			"result": self.result.value,
			"total_duration": self.duration_ns,
		}
