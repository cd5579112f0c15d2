from typing import NamedTuple

# robocopy's exit status is a bit field: 1 copied, 2 extra, 4 mismatched, 8 failed, 16 fatal
FAILURE_THRESHOLD = 8


class ExitCodeInfo(NamedTuple):
    status: str   # "success", "warning", "error" or "info"
    message: str


EXIT_CODES: dict[int, ExitCodeInfo] = {
    0: ExitCodeInfo("success", "No files were copied. Source and destination are already in sync."),
    1: ExitCodeInfo("success", "All files were copied successfully."),
    2: ExitCodeInfo("success", "Extra files or directories were detected in the destination. No files were copied."),
    3: ExitCodeInfo("success", "Some files were copied. Extra files were detected. No failures."),
    4: ExitCodeInfo("warning", "Mismatched files or directories were detected. No failures."),
    5: ExitCodeInfo("warning", "Some files were copied. Some files were mismatched. No failures."),
    6: ExitCodeInfo("warning", "Extra and mismatched files exist. No files were copied and no failures."),
    7: ExitCodeInfo("warning", "Files were copied, and extra and mismatched files were detected. No failures."),
    8: ExitCodeInfo("error", "Some files or directories could not be copied (retry limit exceeded)."),
    9: ExitCodeInfo("error", "Some files were copied, others failed."),
    10: ExitCodeInfo("error", "Copy failures occurred and extra files were detected."),
    11: ExitCodeInfo("error", "Some files were copied, others failed, and extra files were detected."),
    12: ExitCodeInfo("error", "Copy failures occurred and mismatched files were detected."),
    13: ExitCodeInfo("error", "Some files were copied, others failed, and mismatched files were detected."),
    14: ExitCodeInfo("error", "Copy failures occurred with extra and mismatched files."),
    15: ExitCodeInfo("error", "Some files were copied, others failed, with extra and mismatched files."),
    16: ExitCodeInfo("error", "Fatal error. Robocopy did not copy any files (usage error or insufficient access)."),
}


def is_success(code: int | None) -> bool:
    return code is not None and code < FAILURE_THRESHOLD


def describe_exit_code(code: int | None) -> ExitCodeInfo:
    if code in EXIT_CODES:
        return EXIT_CODES[code]
    return ExitCodeInfo("info", f"Exit code: {code}")
