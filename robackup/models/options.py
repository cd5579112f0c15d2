# robackup/models/options.py
from dataclasses import dataclass, field
from enum import Enum


class OptionKind(Enum):
    TOGGLE = "toggle"
    NUMBER = "number"
    TEXT = "text"
    CHARSET = "charset"
    MULTILINE = "multiline"
    FILE = "file"


@dataclass(frozen=True)
class OptionDef:
    flag: str
    label: str
    kind: OptionKind
    section: str
    description: str = ""
    minimum: int | None = None
    maximum: int | None = None
    placeholder: str = ""
    charset: str = ""
    destructive: bool = False


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    options: dict = field(default_factory=dict)


SECTIONS = [
    ("copy", "Copy"),
    ("selection", "File Selection"),
    ("retry", "Retries"),
    ("logging", "Logging"),
    ("job", "Jobs"),
]

_K = OptionKind
_ATTRS = "RASHCNET"

CATALOG: tuple[OptionDef, ...] = (
    # Copy
    OptionDef("/S", "Subdirectories", _K.TOGGLE, "copy", "Copy subdirectories, excluding empty ones."),
    OptionDef("/E", "Subdirectories (incl. empty)", _K.TOGGLE, "copy", "Copy subdirectories, including empty ones."),
    OptionDef("/LEV", "Depth limit", _K.NUMBER, "copy", "Only copy the top n levels of the source tree.", 1, 999, "n"),
    OptionDef("/Z", "Restartable mode", _K.TOGGLE, "copy", "Copy files in restartable mode."),
    OptionDef("/B", "Backup mode", _K.TOGGLE, "copy", "Copy files in backup mode (needs privileges)."),
    OptionDef("/ZB", "Restartable, fall back to backup", _K.TOGGLE, "copy", "Use restartable mode; if access is denied use backup mode."),
    OptionDef("/J", "Unbuffered I/O", _K.TOGGLE, "copy", "Copy using unbuffered I/O (recommended for large files)."),
    OptionDef("/EFSRAW", "EFS raw mode", _K.TOGGLE, "copy", "Copy all encrypted files in EFS RAW mode."),
    OptionDef("/COPY", "File properties to copy", _K.CHARSET, "copy",
              "D=Data A=Attributes T=Timestamps S=Security O=Owner U=Auditing", charset="DATSOU"),
    OptionDef("/DCOPY", "Directory properties to copy", _K.CHARSET, "copy",
              "D=Data A=Attributes T=Timestamps E=Extended attributes X=Skip alt data streams", charset="DATEX"),
    OptionDef("/SEC", "Copy security", _K.TOGGLE, "copy", "Copy files with security (same as /COPY:DATS)."),
    OptionDef("/COPYALL", "Copy everything", _K.TOGGLE, "copy", "Copy all file info (same as /COPY:DATSOU)."),
    OptionDef("/NOCOPY", "No file info", _K.TOGGLE, "copy", "Copy no file info (useful with /PURGE)."),
    OptionDef("/SECFIX", "Fix security", _K.TOGGLE, "copy", "Fix file security on all files, even skipped ones."),
    OptionDef("/TIMFIX", "Fix timestamps", _K.TOGGLE, "copy", "Fix file times on all files, even skipped ones."),
    OptionDef("/PURGE", "Purge destination", _K.TOGGLE, "copy",
              "Delete destination files and folders that no longer exist in the source.", destructive=True),
    OptionDef("/MIR", "Mirror", _K.TOGGLE, "copy",
              "Mirror a directory tree (same as /E plus /PURGE).", destructive=True),
    OptionDef("/MOV", "Move files", _K.TOGGLE, "copy",
              "Move files (delete from source after copying).", destructive=True),
    OptionDef("/MOVE", "Move files and folders", _K.TOGGLE, "copy",
              "Move files and folders (delete from source after copying).", destructive=True),
    OptionDef("/A+", "Add attributes", _K.CHARSET, "copy", "Add the given attributes to copied files.", charset=_ATTRS),
    OptionDef("/A-", "Remove attributes", _K.CHARSET, "copy", "Remove the given attributes from copied files.", charset=_ATTRS),
    OptionDef("/CREATE", "Create tree only", _K.TOGGLE, "copy", "Create directory tree and zero-length files only."),
    OptionDef("/FAT", "8.3 names", _K.TOGGLE, "copy", "Create destination files using 8.3 FAT file names only."),
    OptionDef("/256", "No long paths", _K.TOGGLE, "copy", "Turn off very long path (> 256 characters) support."),
    OptionDef("/MON", "Monitor changes", _K.NUMBER, "copy", "Run again when more than n changes are seen.", 1, 100000, "n"),
    OptionDef("/MOT", "Monitor interval", _K.NUMBER, "copy", "Run again in m minutes, if changed.", 1, 10080, "minutes"),
    OptionDef("/MT", "Threads", _K.NUMBER, "copy", "Multi-threaded copies with n threads (default 8).", 1, 128, "8"),
    OptionDef("/RH", "Run hours", _K.TEXT, "copy", "Run hours, times when new copies may be started.", placeholder="2200-0600"),
    OptionDef("/PF", "Check run hours per file", _K.TOGGLE, "copy", "Check run hours on a per-file (not per-pass) basis."),
    OptionDef("/IPG", "Inter-packet gap", _K.NUMBER, "copy", "Inter-packet gap in ms, to free bandwidth on slow lines.", 1, 100000, "ms"),
    OptionDef("/SL", "Copy symlinks", _K.TOGGLE, "copy", "Copy symbolic links versus the target."),
    OptionDef("/NODCOPY", "No directory info", _K.TOGGLE, "copy", "Copy no directory info (default is /DCOPY:DA)."),
    OptionDef("/NOOFFLOAD", "No offload", _K.TOGGLE, "copy", "Copy files without using the Windows Copy Offload mechanism."),
    OptionDef("/COMPRESS", "Network compression", _K.TOGGLE, "copy", "Request network compression during file transfer."),

    # File selection
    OptionDef("/A", "Archive only", _K.TOGGLE, "selection", "Copy only files with the Archive attribute set."),
    OptionDef("/M", "Archive and reset", _K.TOGGLE, "selection", "Copy only files with the Archive attribute and reset it."),
    OptionDef("/IA", "Include attributes", _K.CHARSET, "selection", "Include only files with any of the given attributes.", charset=_ATTRS + "O"),
    OptionDef("/XA", "Exclude attributes", _K.CHARSET, "selection", "Exclude files with any of the given attributes.", charset=_ATTRS + "O"),
    OptionDef("/XF", "Exclude files", _K.MULTILINE, "selection", "File names or wildcards to exclude, one per line.",
              placeholder="*.tmp\nThumbs.db"),
    OptionDef("/XD", "Exclude directories", _K.MULTILINE, "selection", "Directory names or paths to exclude, one per line.",
              placeholder="node_modules\n$RECYCLE.BIN"),
    OptionDef("/IF", "Include files", _K.MULTILINE, "selection", "Include only these file names or wildcards, one per line.",
              placeholder="*.docx\n*.xlsx"),
    OptionDef("/XC", "Exclude changed", _K.TOGGLE, "selection", "Exclude changed files."),
    OptionDef("/XN", "Exclude newer", _K.TOGGLE, "selection", "Exclude newer files."),
    OptionDef("/XO", "Exclude older", _K.TOGGLE, "selection", "Exclude older files."),
    OptionDef("/XX", "Exclude extra", _K.TOGGLE, "selection", "Exclude extra files and directories."),
    OptionDef("/XL", "Exclude lonely", _K.TOGGLE, "selection", "Exclude lonely files and directories."),
    OptionDef("/IS", "Include same", _K.TOGGLE, "selection", "Include same files."),
    OptionDef("/IT", "Include tweaked", _K.TOGGLE, "selection", "Include tweaked files."),
    OptionDef("/MAX", "Maximum size", _K.NUMBER, "selection", "Exclude files bigger than n bytes.", 1, 2**31 - 1, "bytes"),
    OptionDef("/MIN", "Minimum size", _K.NUMBER, "selection", "Exclude files smaller than n bytes.", 1, 2**31 - 1, "bytes"),
    OptionDef("/MAXAGE", "Maximum age", _K.TEXT, "selection", "Exclude files older than n days or date (YYYYMMDD).", placeholder="30"),
    OptionDef("/MINAGE", "Minimum age", _K.TEXT, "selection", "Exclude files newer than n days or date (YYYYMMDD).", placeholder="1"),
    OptionDef("/MAXLAD", "Maximum last access", _K.TEXT, "selection", "Exclude files unused since n days or date.", placeholder="90"),
    OptionDef("/MINLAD", "Minimum last access", _K.TEXT, "selection", "Exclude files used since n days or date.", placeholder="1"),
    OptionDef("/XJ", "Exclude junctions", _K.TOGGLE, "selection", "Exclude junction points (normally included by default)."),
    OptionDef("/FFT", "FAT file times", _K.TOGGLE, "selection", "Assume FAT file times (2-second granularity)."),
    OptionDef("/DST", "DST compensation", _K.TOGGLE, "selection", "Compensate for one-hour DST time differences."),
    OptionDef("/XJD", "Exclude dir junctions", _K.TOGGLE, "selection", "Exclude junction points for directories."),
    OptionDef("/XJF", "Exclude file junctions", _K.TOGGLE, "selection", "Exclude junction points for files."),

    # Retries
    OptionDef("/R", "Retries", _K.NUMBER, "retry", "Number of retries on failed copies (default 1 million).", 1, 1000000, "3"),
    OptionDef("/W", "Wait time", _K.NUMBER, "retry", "Wait time between retries in seconds (default 30).", 1, 3600, "10"),
    OptionDef("/REG", "Save as default", _K.TOGGLE, "retry", "Save /R and /W in the registry as default settings."),
    OptionDef("/TBD", "Wait for share names", _K.TOGGLE, "retry", "Wait for share names to be defined (retry error 67)."),
    OptionDef("/LFSM", "Low free space mode", _K.TOGGLE, "retry", "Operate in low free space mode, enabling copy pause and resume."),

    # Logging
    OptionDef("/L", "List only", _K.TOGGLE, "logging", "List only: don't copy, timestamp or delete any files."),
    OptionDef("/X", "Report extra files", _K.TOGGLE, "logging", "Report all extra files, not just those selected."),
    OptionDef("/V", "Verbose", _K.TOGGLE, "logging", "Produce verbose output, showing skipped files."),
    OptionDef("/TS", "Source timestamps", _K.TOGGLE, "logging", "Include source file timestamps in the output."),
    OptionDef("/FP", "Full paths", _K.TOGGLE, "logging", "Include full path names of files in the output."),
    OptionDef("/BYTES", "Sizes in bytes", _K.TOGGLE, "logging", "Print sizes as bytes."),
    OptionDef("/NS", "No sizes", _K.TOGGLE, "logging", "Don't log file sizes."),
    OptionDef("/NC", "No classes", _K.TOGGLE, "logging", "Don't log file classes."),
    OptionDef("/NFL", "No file list", _K.TOGGLE, "logging", "Don't log file names."),
    OptionDef("/NDL", "No directory list", _K.TOGGLE, "logging", "Don't log directory names."),
    OptionDef("/NP", "No progress", _K.TOGGLE, "logging", "Don't display percentage copied."),
    OptionDef("/ETA", "Show ETA", _K.TOGGLE, "logging", "Show estimated time of arrival of copied files."),
    OptionDef("/LOG", "Log file", _K.FILE, "logging", "Write status to a log file (overwrite).", placeholder="C:\\Logs\\robocopy.log"),
    OptionDef("/LOG+", "Log file (append)", _K.FILE, "logging", "Write status to a log file (append).", placeholder="C:\\Logs\\robocopy.log"),
    OptionDef("/UNILOG", "Unicode log file", _K.FILE, "logging", "Write status to a Unicode log file (overwrite)."),
    OptionDef("/UNILOG+", "Unicode log file (append)", _K.FILE, "logging", "Write status to a Unicode log file (append)."),
    OptionDef("/TEE", "Tee", _K.TOGGLE, "logging", "Output to console window as well as the log file."),
    OptionDef("/NJH", "No job header", _K.TOGGLE, "logging", "No job header."),
    OptionDef("/NJS", "No job summary", _K.TOGGLE, "logging", "No job summary."),
    OptionDef("/UNICODE", "Unicode output", _K.TOGGLE, "logging", "Output status as Unicode."),

    # Jobs
    OptionDef("/JOB", "Load job", _K.TEXT, "job", "Take parameters from the named job file.", placeholder="backup_job"),
    OptionDef("/SAVE", "Save job", _K.TEXT, "job", "Save parameters to the named job file.", placeholder="backup_job"),
    OptionDef("/QUIT", "Quit after parsing", _K.TOGGLE, "job", "Quit after processing the command line (to view parameters)."),
    OptionDef("/NOSD", "No source directory", _K.TOGGLE, "job", "No source directory is specified."),
    OptionDef("/NODD", "No destination directory", _K.TOGGLE, "job", "No destination directory is specified."),
)

OPTIONS_BY_FLAG: dict[str, OptionDef] = {o.flag: o for o in CATALOG}


def options_in_section(section: str) -> list[OptionDef]:
    return [o for o in CATALOG if o.section == section]


def destructive_flags(options: dict) -> list[str]:
    """Flags in *options* that are switched on and can delete data."""
    return [f for f, v in options.items() if v and (o := OPTIONS_BY_FLAG.get(f)) and o.destructive]


PRESETS: tuple[Preset, ...] = (
    Preset("Mirror", "Exact copy of the source; removes files missing from the source.",
           {"/MIR": True, "/R": 3, "/W": 5, "/MT": 8}),
    Preset("Incremental", "Copy new and changed files only, keep everything else.",
           {"/E": True, "/XO": True, "/R": 3, "/W": 5}),
    Preset("Network copy", "Restartable copy tuned for unreliable network shares.",
           {"/E": True, "/Z": True, "/R": 5, "/W": 10, "/MT": 16, "/NP": True}),
    Preset("Move files", "Move files and folders to the destination.",
           {"/MOVE": True, "/E": True, "/R": 3, "/W": 5}),
)

DEFAULT_EXCLUSIONS = {
    "files": ["Thumbs.db", "desktop.ini", ".DS_Store", "*.tmp", "~$*", "pagefile.sys", "hiberfil.sys"],
    "folders": ["$RECYCLE.BIN", "System Volume Information", "node_modules", ".git", "__pycache__"],
}
