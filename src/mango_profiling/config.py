# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Advanced Micro Devices, Inc. All rights reserved.

"""Configuration for the profiler."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_bool(name: str, value: str) -> bool:
	lowered = value.strip().lower()
	if lowered in _TRUE_VALUES:
		return True
	if lowered in _FALSE_VALUES:
		return False
	raise ValueError(f"{name} must be one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}, got '{value}'")


@dataclass
class ProfilerConfig:
	"""Settings controlling where and whether profiling results are saved.

	Args:
		output_directory: Directory the JSON profiling files are written to
		file_prefix: Leading part of every profiling file name
		save_to_file: Set to False to only print the summary on dump
		log_level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

	Examples:
		>>> config = ProfilerConfig(output_directory="profiles", log_level="INFO")
		>>> config = ProfilerConfig.from_env()  # honours MANGO_PROFILING_* variables
	"""

	output_directory: Union[str, Path] = "."
	file_prefix: str = "mango_profiling"
	save_to_file: bool = True
	log_level: str = "WARNING"

	def __post_init__(self):
		"""Normalize paths and validate values."""
		self.output_directory = Path(self.output_directory)
		if not self.file_prefix:
			raise ValueError("file_prefix must not be empty")
		if os.sep in self.file_prefix:
			raise ValueError(f"file_prefix must not contain '{os.sep}', got '{self.file_prefix}'")
		self.log_level = self.log_level.upper()
		if self.log_level not in _LOG_LEVELS:
			raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got '{self.log_level}'")

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ProfilerConfig":
		"""Create a config, overriding defaults with MANGO_PROFILING_* variables.

		Recognized variables:
			MANGO_PROFILING_DIR: output_directory
			MANGO_PROFILING_PREFIX: file_prefix
			MANGO_PROFILING_SAVE: save_to_file (1/0, true/false, yes/no, on/off)
			MANGO_PROFILING_LOG_LEVEL: log_level
		"""
		env = os.environ if environ is None else environ
		kwargs = {}
		if env.get("MANGO_PROFILING_DIR"):
			kwargs["output_directory"] = env["MANGO_PROFILING_DIR"]
		if env.get("MANGO_PROFILING_PREFIX"):
			kwargs["file_prefix"] = env["MANGO_PROFILING_PREFIX"]
		if env.get("MANGO_PROFILING_SAVE"):
			kwargs["save_to_file"] = _parse_bool("MANGO_PROFILING_SAVE", env["MANGO_PROFILING_SAVE"])
		if env.get("MANGO_PROFILING_LOG_LEVEL"):
			kwargs["log_level"] = env["MANGO_PROFILING_LOG_LEVEL"]
		return cls(**kwargs)
