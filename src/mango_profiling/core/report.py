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

"""Rendering and persistence of profiling results."""

import json
import random
import time
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from mango_profiling.core.benchmark import Benchmark, SampleBenchmark
from mango_profiling.exceptions import ProfileFormatError, ProfileWriteError
from mango_profiling.logger import logger


def _buffer_line(entry: Dict[str, Any]) -> str:
	return f"Id: {entry['buffer_id']} | Size (bytes): {entry['size']} | Duration (ns): {entry['duration']}"


def _kernel_line(entry: Dict[str, Any]) -> str:
	return f"Id: {entry['kernel_id']} | Duration (ns): {entry['duration']}"


def _resource_line(entry: Dict[str, Any]) -> str:
	return (
		f"# Kernels: {entry['kernel_amount']} "
		f"| # Buffers: {entry['buffer_amount']} "
		f"| # Events: {entry['event_amount']} "
		f"| Duration (ns): {entry['duration']}"
	)


# Fixed output order: (document key, summary title, line formatter)
CATEGORIES = (
	("buffer_reads", "Buffer reads", _buffer_line),
	("buffer_writes", "Buffer writes", _buffer_line),
	("kernel_executions", "Kernel executions", _kernel_line),
	("resource_allocations", "Resource allocations", _resource_line),
	("resource_deallocations", "Resource deallocations", _resource_line),
)

CATEGORY_KEYS = tuple(key for key, _, _ in CATEGORIES)

# Fields every saved entry of a category carries
CATEGORY_FIELDS = {
	"buffer_reads": ("buffer_id", "size", "duration"),
	"buffer_writes": ("buffer_id", "size", "duration"),
	"kernel_executions": ("kernel_id", "duration"),
	"resource_allocations": ("kernel_amount", "buffer_amount", "event_amount", "duration"),
	"resource_deallocations": ("kernel_amount", "buffer_amount", "event_amount", "duration"),
}

SAMPLE_FIELDS = ("result", "total_duration")


def build_document(
	sample: Optional[SampleBenchmark], categories: Dict[str, Sequence[Benchmark]]
) -> Dict[str, Any]:
	"""
	Build the JSON document for a dump.

	Args:
	    sample: The current sample, if any. Its keys are left out when None.
	    categories: Events per category key, in insertion order

	Returns:
	    Dictionary ready for json serialization
	"""
	document: Dict[str, Any] = {}
	if sample is not None:
		document.update(sample.to_dict())
	for key in CATEGORY_KEYS:
		document[key] = [event.to_dict() for event in categories.get(key, ())]
	return document


def render_summary(
	document: Dict[str, Any], parameters: Optional[Iterable[Tuple[str, str]]] = None
) -> List[str]:
	"""
	Render the human readable summary of a profiling document.

	Args:
	    document: Document as produced by build_document or load_profile
	    parameters: Sample parameter pairs to list instead of document["params"].
	        The collector passes the original pairs so duplicates are shown.

	Returns:
	    Summary lines, without trailing newlines
	"""
	lines = []
	if "name" in document:
		if parameters is None:
			parameters = document.get("params", {}).items()
		lines.append("Sample finished")
		lines.append(f"Name: {document['name']}")
		lines.append("Parameters: ")
		for key, value in parameters:
			lines.append(f"\t{key}: {value}")
		lines.append(f"Result: {document['result']} | Duration (ns): {document['total_duration']}")
	for key, title, format_line in CATEGORIES:
		lines.append(f"{title}:")
		for entry in document.get(key, []):
			lines.append(format_line(entry))
	return lines


def make_filename(
	prefix: str = "mango_profiling",
	sample_name: Optional[str] = None,
	timestamp: Optional[int] = None,
	suffix: Optional[int] = None,
) -> str:
	"""
	Build a profiling file name.

	The pattern is ``<prefix>_<sample name>_<unix seconds>_<NNNN>.json``; the
	sample segment is dropped without a sample. The random four digit suffix
	keeps dumps within the same second apart.
	"""
	if timestamp is None:
		timestamp = int(time.time())
	if suffix is None:
		suffix = random.randint(0, 9999)
	filename = f"{prefix}_"
	if sample_name is not None:
		filename += f"{sample_name}_"
	return filename + f"{timestamp}_{suffix:04d}.json"


def save_profile(
	document: Dict[str, Any], output_directory: Union[str, Path] = ".", prefix: str = "mango_profiling"
) -> Path:
	"""
	Write a profiling document to a new file.

	Returns:
	    Path of the written file

	Raises:
	    ProfileWriteError: If the document is not serializable or the file cannot be written
	"""
	directory = Path(output_directory)
	filepath = directory / make_filename(prefix, document.get("name"))
	try:
		# Serialize before touching the file so a bad value leaves nothing behind
		text = json.dumps(document, indent=2)
		directory.mkdir(parents=True, exist_ok=True)
		with open(filepath, "w") as f:
			f.write(text)
	except (OSError, TypeError, ValueError) as e:
		raise ProfileWriteError(f"Could not write profiling file {filepath}: {e}", path=filepath) from e
	logger.info(f"Profiling file written to {filepath}")
	return filepath


def load_profile(path: Union[str, Path]) -> Dict[str, Any]:
	"""
	Read a profiling document saved by save_profile.

	Raises:
	    ProfileFormatError: If the file is unreadable, misses a category or
	        holds an incomplete sample or event
	"""
	try:
		with open(path, "r") as f:
			document = json.load(f)
	except (OSError, json.JSONDecodeError) as e:
		raise ProfileFormatError(f"Could not read profiling file {path}: {e}", path=path) from e

	if not isinstance(document, dict):
		raise ProfileFormatError(f"{path} does not contain a JSON object", path=path)
	missing = [key for key in CATEGORY_KEYS if not isinstance(document.get(key), list)]
	if missing:
		raise ProfileFormatError(f"{path} is missing categories: {', '.join(missing)}", path=path)

	if "name" in document:
		missing = [field for field in SAMPLE_FIELDS if field not in document]
		if missing:
			raise ProfileFormatError(f"{path} sample is missing fields: {', '.join(missing)}", path=path)
		if not isinstance(document.get("params", {}), dict):
			raise ProfileFormatError(f"{path} sample params must be an object", path=path)

	for key, fields in CATEGORY_FIELDS.items():
		for index, entry in enumerate(document[key]):
			if not isinstance(entry, dict):
				raise ProfileFormatError(f"{path} {key}[{index}] is not an object", path=path)
			missing = [field for field in fields if field not in entry]
			if missing:
				raise ProfileFormatError(
					f"{path} {key}[{index}] is missing fields: {', '.join(missing)}", path=path
				)
	return document


def flatten_events(document: Dict[str, Any]) -> List[Dict[str, Any]]:
	"""One record per event, tagged with its category key."""
	rows = []
	for key in CATEGORY_KEYS:
		for entry in document.get(key, []):
			rows.append({"category": key, **entry})
	return rows


def to_dataframe(document: Dict[str, Any]) -> pd.DataFrame:
	"""
	Convert a profiling document to a DataFrame with one row per event.

	Fields that do not apply to a category are left empty.
	"""
	columns = ["category", "buffer_id", "size", "kernel_id", "kernel_amount", "buffer_amount", "event_amount", "duration"]
	return pd.DataFrame(flatten_events(document), columns=columns)


def write_results(document: Dict[str, Any], output_file: Optional[str] = None):
	"""
	Writes a profiling document to stdout, a .json file or a flattened .csv file.
	"""
	log_message = f"Writing results to {output_file}" if output_file is not None else "Writing results to stdout"
	logger.info(log_message)

	if output_file is None:
		print(json.dumps(document, indent=2))
	elif output_file.endswith(".json"):
		with open(output_file, "w") as f:
			json.dump(document, f, indent=2)
	elif output_file.endswith(".csv"):
		to_dataframe(document).to_csv(output_file, index=False)
	else:
		raise ValueError(f"Invalid output file extension for {output_file}. Must be .json or .csv.")
