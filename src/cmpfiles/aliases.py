from cmpfiles.core.models import DEFAULT_BUFFER_SIZE, STDIN_IDENTITY

DESCRIPTION_TEXT = (
    "Compare 2 or more files byte by byte with each other, "
    "and show which ones binary data matched or not."
)

USAGE_HINT_TEXT = (
    "For more information about this program, run it again with -h or --help."
)

BUFFER_SIZE_HELP_TEXT = (
    f"Size of the buffers in bytes (default: {DEFAULT_BUFFER_SIZE}),\n"
    "each holding one chunk of data per file while comparing.\n"
    "Accepts human-readable sizes, e.g. 65536, 64K, 1MB"
)

COMPARE_FILES_HELP_TEXT = (
    "Files to compare with each other, byte by byte.\n"
    f"To read one of them from standard input, enter it as \"{STDIN_IDENTITY}\".\n"
    "Cannot be combined with positional file paths"
)

EPILOG_TEXT = f"""
Exit status:
  0  all files matched
  1  at least one pair of files did not match
  2  invalid arguments, or a file could not be opened

Examples:
  %(prog)s file1.txt file2.txt
  %(prog)s file1.txt file2.txt file3.bin -om
  %(prog)s file1.txt file2.txt file3.bin -bs 65536
  %(prog)s -bs 64K -om -cf file1.txt file2.txt
  %(prog)s {STDIN_IDENTITY} file.bin -bs 65536 < file.txt
"""
