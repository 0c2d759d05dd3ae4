"""
Tests for the process-wide profiler and its exit hook
"""

import io
import logging
from unittest.mock import patch

import pytest

from mango_profiling import Profiler, ProfilerConfig, get_profiler, init_profiler, shutdown_profiler
from mango_profiling.core import profiler as profiler_module

pytestmark = pytest.mark.usefixtures("clean_process_profiler")


def test_get_profiler_is_lazy_and_shared(monkeypatch, tmp_path):
	monkeypatch.setenv("MANGO_PROFILING_DIR", str(tmp_path))
	with patch("mango_profiling.core.profiler.atexit.register") as register:
		first = get_profiler()
		second = get_profiler()
	assert first is second
	assert isinstance(first, Profiler)
	assert first.config.output_directory == tmp_path
	register.assert_called_once_with(profiler_module._close_process_profiler)


def test_init_profiler_replaces_and_closes_previous(tmp_path):
	output = io.StringIO()
	with patch("mango_profiling.core.profiler.atexit.register"):
		previous = init_profiler(ProfilerConfig(output_directory=tmp_path), stream=output)
		previous.start_kernel_execution(1).finish()
		current = init_profiler(ProfilerConfig(output_directory=tmp_path, save_to_file=False), stream=output)
	assert current is not previous
	assert get_profiler() is current
	assert previous.all_dumped is True
	assert "Id: 1 | Duration (ns): " in output.getvalue()


def test_exit_hook_dumps_exactly_once(tmp_path):
	output = io.StringIO()
	with patch("mango_profiling.core.profiler.atexit.register"):
		profiler = init_profiler(ProfilerConfig(output_directory=tmp_path), stream=output)
	profiler.start_buffer_read(1, 16).finish()

	with patch.object(profiler, "dump", wraps=profiler.dump) as dump:
		profiler_module._close_process_profiler()
		profiler_module._close_process_profiler()
	assert dump.call_count == 1
	assert len(list(tmp_path.glob("mango_profiling_*.json"))) == 1


def test_exit_hook_skips_explicit_dump(tmp_path):
	with patch("mango_profiling.core.profiler.atexit.register"):
		profiler = init_profiler(ProfilerConfig(output_directory=tmp_path), stream=io.StringIO())
	profiler.start_kernel_execution(3).finish()
	profiler.dump()

	with patch.object(profiler, "dump") as dump:
		profiler_module._close_process_profiler()
	dump.assert_not_called()


def test_shutdown_profiler_closes_and_forgets(tmp_path):
	output = io.StringIO()
	with patch("mango_profiling.core.profiler.atexit.register"):
		profiler = init_profiler(ProfilerConfig(output_directory=tmp_path), stream=output)
	profiler.start_kernel_execution(5)

	shutdown_profiler()

	assert profiler.all_dumped is True
	assert profiler_module._profiler is None
	assert "Id: 5" in output.getvalue()


def test_shutdown_without_profiler_is_noop():
	shutdown_profiler()
	assert profiler_module._profiler is None


@pytest.fixture
def package_logger():
	log = logging.getLogger("mango_profiling")
	level = log.level
	yield log
	log.setLevel(level)


def test_plain_profiler_keeps_host_log_level(package_logger, tmp_path):
	package_logger.setLevel(logging.DEBUG)
	Profiler(ProfilerConfig(output_directory=tmp_path, log_level="ERROR"))
	assert package_logger.level == logging.DEBUG


def test_init_profiler_applies_log_level(package_logger, tmp_path):
	with patch("mango_profiling.core.profiler.atexit.register"):
		init_profiler(ProfilerConfig(output_directory=tmp_path, log_level="INFO"), stream=io.StringIO())
	assert package_logger.level == logging.INFO


def test_get_profiler_applies_env_log_level(package_logger, monkeypatch, tmp_path):
	monkeypatch.setenv("MANGO_PROFILING_DIR", str(tmp_path))
	monkeypatch.setenv("MANGO_PROFILING_LOG_LEVEL", "error")
	with patch("mango_profiling.core.profiler.atexit.register"):
		get_profiler()
	assert package_logger.level == logging.ERROR
