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


def mango_profiling_parser(argv=None):
	import argparse

	parser = argparse.ArgumentParser(
		description="Inspect profiling files written by mango profiling.",
		prog="mango-profiling",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  # Print the summary of a saved profile
  mango-profiling show mango_profiling_gemm_1700000000_0042.json

  # Flatten all events into a CSV table
  mango-profiling export mango_profiling_gemm_1700000000_0042.json -o events.csv
""",
	)
	parser.add_argument(
		"-v",
		"--verbose",
		action="count",
		default=0,
		help="Increase verbosity level (e.g., -v, -vv).",
	)

	subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

	show_parser = subparsers.add_parser("show", help="Print the summary of a profiling file")
	show_parser.add_argument("profile", help="Path to a mango profiling JSON file")

	export_parser = subparsers.add_parser("export", help="Export the events of a profiling file")
	export_parser.add_argument("profile", help="Path to a mango profiling JSON file")
	export_parser.add_argument(
		"-o",
		"--output_file",
		type=str,
		metavar="",
		help="Output path ending in .csv (one row per event) or .json. Prints JSON when omitted.",
	)

	return parser.parse_args(argv)


def main(argv=None):
	args = mango_profiling_parser(argv)

	# Set logging level based on verbosity
	import logging

	from mango_profiling.logger import logger

	logging.basicConfig(format="%(levelname)s: %(message)s")
	if args.verbose == 1:
		logger.set_level("info")
	elif args.verbose >= 2:
		logger.set_level("debug")
	else:
		logger.set_level("warning")

	from mango_profiling.core import report
	from mango_profiling.exceptions import ProfileFormatError

	try:
		document = report.load_profile(args.profile)
	except ProfileFormatError as e:
		logger.error(str(e))
		return 1

	if args.command == "show":
		for line in report.render_summary(document):
			print(line)
		return 0

	try:
		report.write_results(document, args.output_file)
	except (OSError, ValueError) as e:
		logger.error(f"Error writing results: {e}")
		return 1
	return 0


if __name__ == "__main__":
	import sys

	sys.exit(main())
