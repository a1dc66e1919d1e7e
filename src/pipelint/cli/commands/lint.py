"""
LINT COMMAND
------------
Lints every discovered workflow file, optionally fixing it in place.

Exit codes:
    0  no errors
    1  errors found (warnings count as errors under --strict)
    2  no workflow files found
    3  a file could not be read or written
"""
import logging
import time

from pipelint.ui.reporters import JSONReporter

logger = logging.getLogger("pipelint.cli.lint")

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_NO_FILES = 2
EXIT_IO_FAILURE = 3


def handle_lint_command(args, engine, formatter) -> int:
    """
    Handles a lint run and returns the process exit code.
    """
    is_json = args.json
    start_time = time.time()

    files = engine.discover(args.path)
    if not files:
        if is_json:
            print(JSONReporter().generate_no_files(args.path))
        else:
            formatter.display_no_files(args.path)
        return EXIT_NO_FILES

    if not is_json:
        formatter.display_header(len(files))

    reports = []
    failures = []
    total_errors = 0
    total_warnings = 0

    for path in files:
        display = engine.display_path(path)
        try:
            report = engine.lint_file(path, fix=args.fix)
        except OSError as e:
            logger.error(f"Failed to process {display}: {e}")
            failures.append((display, str(e)))
            if not is_json:
                formatter.display_failure(display, str(e))
            continue

        reports.append(report)
        total_errors += report.errors
        total_warnings += report.warnings
        if not is_json:
            formatter.display_report(report)

    if engine.strict:
        total_errors += total_warnings
        total_warnings = 0

    if is_json:
        duration = time.time() - start_time
        print(JSONReporter().generate(
            reports, total_errors, total_warnings, duration,
            strict=engine.strict, failures=failures
        ))
    else:
        formatter.print_summary(total_errors, total_warnings)

    if failures:
        return EXIT_IO_FAILURE
    if total_errors > 0:
        return EXIT_ERRORS
    return EXIT_OK
