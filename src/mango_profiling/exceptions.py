"""Custom exceptions for mango profiling."""


class MangoProfilingError(Exception):
	"""Base exception for all mango profiling errors."""

	pass


class ProfileWriteError(MangoProfilingError):
	"""Raised when a profiling file cannot be written."""

	def __init__(self, message: str, path=None):
		super().__init__(message)
		self.path = path


class ProfileFormatError(MangoProfilingError):
	"""Raised when a saved profiling file cannot be read back."""

	def __init__(self, message: str, path=None):
		super().__init__(message)
		self.path = path
