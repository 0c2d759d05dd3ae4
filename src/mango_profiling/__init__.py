"""Mango profiling: timings of buffer transfers, kernel executions and
resource (de)allocations of a compute runtime.

Public API:
    - Profiler: Collector that owns recorded events and dumps them
    - ProfilerConfig: Output settings (directory, file prefix, saving, log level)
    - init_profiler / get_profiler / shutdown_profiler: process-wide profiler
    - Benchmark event types and SampleResult
    - Exceptions: MangoProfilingError, ProfileWriteError, ProfileFormatError

Example:
    >>> from mango_profiling import get_profiler
    >>> profiler = get_profiler()
    >>> sample = profiler.start_sample_benchmark("vector_add", [("size", "1024")])
    >>> read = profiler.start_buffer_read(buffer_id=0, size=4096)
    >>> read.finish()
    >>> sample.mark_success().finish()
    >>> profiler.dump()
"""

from importlib.metadata import PackageNotFoundError, version

from .config import ProfilerConfig
from .core.benchmark import (
	Benchmark,
	BufferBenchmark,
	KernelBenchmark,
	ResourceBenchmark,
	SampleBenchmark,
	SampleResult,
)
from .core.profiler import Profiler, get_profiler, init_profiler, shutdown_profiler
from .exceptions import MangoProfilingError, ProfileFormatError, ProfileWriteError

try:
	__version__ = version("mango-profiling")
except PackageNotFoundError:
	__version__ = "0.0.0"

__all__ = [
	"Benchmark",
	"BufferBenchmark",
	"KernelBenchmark",
	"MangoProfilingError",
	"ProfileFormatError",
	"ProfileWriteError",
	"Profiler",
	"ProfilerConfig",
	"ResourceBenchmark",
	"SampleBenchmark",
	"SampleResult",
	"get_profiler",
	"init_profiler",
	"shutdown_profiler",
]
