import io

import pytest

from mango_profiling import Profiler, ProfilerConfig
from mango_profiling.core import profiler as profiler_module


@pytest.fixture
def output():
	"""Stream collecting the printed summary."""
	return io.StringIO()


@pytest.fixture
def profiler(tmp_path, output):
	"""Profiler writing its files into a temporary directory."""
	prof = Profiler(ProfilerConfig(output_directory=tmp_path), stream=output)
	yield prof
	# Keep teardown dumps out of other tests
	prof.all_dumped = True


@pytest.fixture
def clean_process_profiler(monkeypatch):
	"""Isolate the process-wide profiler and its exit hook."""
	monkeypatch.setattr(profiler_module, "_profiler", None)
	monkeypatch.setattr(profiler_module, "_exit_hook_registered", False)
	yield
	current = profiler_module._profiler
	if current is not None:
		current.all_dumped = True
