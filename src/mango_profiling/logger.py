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

"""
Mango profiling logging utilities
"""

import logging


class MangoLogger:
	"""Logger that automatically prefixes all messages with [MANGO]"""

	def __init__(self, name: str = "mango_profiling"):
		self._logger = logging.getLogger(name)

	def set_level(self, level: str):
		"""
		Set logging level of the package logger

		Args:
			level: Log level string (debug, info, warning, error, critical)
		"""
		self._logger.setLevel(getattr(logging, level.upper()))

	def debug(self, msg: str, *args, **kwargs):
		self._logger.debug(f"[MANGO] {msg}", *args, **kwargs)

	def info(self, msg: str, *args, **kwargs):
		self._logger.info(f"[MANGO] {msg}", *args, **kwargs)

	def warning(self, msg: str, *args, **kwargs):
		self._logger.warning(f"[MANGO] {msg}", *args, **kwargs)

	def error(self, msg: str, *args, **kwargs):
		self._logger.error(f"[MANGO] {msg}", *args, **kwargs)

	def critical(self, msg: str, *args, **kwargs):
		self._logger.critical(f"[MANGO] {msg}", *args, **kwargs)


# Global logger instance
logger = MangoLogger()
