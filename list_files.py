import sys
import os
import stat
import time

from rich.console import Console
from rich.progress import Progress, BarColumn, MofNCompleteColumn, TimeElapsedColumn
from rich.text import Text

from top_k import FileEntry, TopKSizeTracker


"""
Lists the largest files under a directory, largest first.

Options:
  --help, -h           show usage and exit
  --path, -p <PATH>    directory to crawl (default: ./)
  --count, -c <COUNT>  number of files to report (default: 100)

sample usage:

python3 list_files.py -p ~/movies -c 10
"""


DEFAULT_PATH = './'
DEFAULT_COUNT = 100

UNITS = ('Bytes', 'KB', 'MB', 'GB', 'TB', 'PB', 'EB', 'ZB', 'YB')

USAGE = """Usage: list_files.py [OPTIONS]

Options:
  --help, -h           Show this help message and exit
  --path, -p <PATH>    Set the search path (default: ./)
  --count, -c <COUNT>  Set the number of files to list (default: 100)

Examples:
  list_files.py --path /some/path --count 50
  list_files.py -p /another/path -c 75

Note:
  If the provided path or count value contains spaces, enclose it in quotes."""


console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


class UsageError(ValueError):
    pass


def yield_files(root):
    # only regular files; symlinks are never followed below the root
    stack = [(root, True)]
    while stack:
        path, is_root = stack.pop()
        try:
            st = os.stat(path) if is_root else os.lstat(path)
        except OSError:
            continue

        if stat.S_ISDIR(st.st_mode):
            try:
                children = os.listdir(path)
            except OSError:
                continue
            stack.extend((os.path.join(path, child), False) for child in reversed(children))
        elif stat.S_ISREG(st.st_mode) and st.st_size:
            yield FileEntry(path, st.st_size)


def count_files(root):
    return sum(1 for _ in yield_files(root))


def human_size(size):
    size = float(size)
    unit = UNITS[0]
    for next_unit in UNITS[1:]:
        if size < 1024:
            break
        size /= 1024
        unit = next_unit
    if size.is_integer():
        return f'{size:.0f} {unit}'
    return f'{size:.2f} {unit}'


class ProgressReporter:
    """Progress bar over the files being scanned. Knows nothing about the tracker."""

    def __init__(self, total, out=None):
        self.progress = Progress(
            TimeElapsedColumn(),
            BarColumn(bar_width=50),
            MofNCompleteColumn(),
            console=out or console,
        )
        self.task = self.progress.add_task('scan', total=total)

    def __enter__(self):
        self.progress.start()
        return self

    def __exit__(self, *exc):
        self.progress.stop()

    def advance(self):
        self.progress.advance(self.task)


def scan(root, count, reporter=None):
    tracker = TopKSizeTracker(count)
    for entry in yield_files(root):
        tracker.offer(entry)
        if reporter:
            reporter.advance()
    return tracker.sorted_snapshot()


def _flag_value(args, names):
    for idx, arg in enumerate(args):
        if arg in names:
            if idx + 1 >= len(args):
                raise UsageError(f'No value provided after {names[0]} option.')
            return args[idx + 1]
    return None


def parse_args(args):
    """Returns (root_dir, count), or None if help was asked for."""
    if '--help' in args or '-h' in args:
        return None

    root_dir = DEFAULT_PATH
    path_value = _flag_value(args, ('--path', '-p'))
    if path_value is not None:
        if not os.path.exists(path_value):
            raise UsageError('Invalid path. Please provide a valid path.')
        root_dir = path_value

    count = DEFAULT_COUNT
    count_value = _flag_value(args, ('--count', '-c'))
    if count_value is not None:
        if not (count_value.isascii() and count_value.isdigit()):
            raise UsageError('Invalid count value. Please provide a valid number.')
        count = int(count_value)

    return root_dir, count


def print_entry(entry):
    line = Text.assemble((entry.path, 'green'), ' ', (f'({human_size(entry.size)})', 'yellow'))
    console.print(line, soft_wrap=True)


def main(argv=None):
    start = time.perf_counter()
    args = sys.argv[1:] if argv is None else argv

    try:
        parsed = parse_args(args)
    except UsageError as ex:
        err_console.print(f'Error: {ex}', style='red', soft_wrap=True)
        return 1

    if parsed is None:
        console.print(USAGE, markup=False)
        return 0
    root_dir, n = parsed

    console.print('Preparing ...', style='blue')
    total = count_files(root_dir)

    with ProgressReporter(total) as reporter:
        largest = scan(root_dir, n, reporter)

    for entry in largest:
        print_entry(entry)

    elapsed = time.perf_counter() - start
    console.print(f'\nFound the largest {n} files in {elapsed:.2f}s', style='bright_cyan')
    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
