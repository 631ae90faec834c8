from colorama import init as colorama_init, Fore, Style
from datetime import datetime
colorama_init(autoreset=True)


class Log:
    def __init__(self, verbose: int = 1, stream=None):
        self.verbose = verbose
        self.stream = stream      # None -> stdout

    def _time(self):
        return datetime.now().strftime("[%H:%M:%S]")

    def _fmt(self, level: str, color: str):
        return f"{self._time()} {color}[{level}]{Style.RESET_ALL}"

    def _out(self, line: str):
        print(line, file=self.stream)

    def info(self, msg: str):
        if self.verbose >= 1:
            self._out(f"{self._fmt('INFO', Fore.CYAN)} {msg}")

    def warn(self, msg: str):
        if self.verbose >= 0:
            self._out(f"{self._fmt('WARNING', Fore.YELLOW)} {msg}")

    def ok(self, msg: str):
        self._out(f"{self._fmt('SUCCESS', Fore.GREEN)} {msg}")

    def fail(self, msg: str):
        self._out(f"{self._fmt('FAIL', Fore.RED)} {msg}")

    def debug(self, msg: str):
        if self.verbose >= 2:
            self._out(f"{self._fmt('DEBUG', Fore.MAGENTA)} {msg}")

    def line(self, msg: str):
        self._out(msg)

    def match(self, source: str, pattern: str, count: int):
        col = Fore.YELLOW if source == "inline" else Fore.WHITE
        self._out(f"{self._fmt('MATCH', Fore.GREEN)} {col}{source}{Style.RESET_ALL} "
                  f"{Fore.MAGENTA}{pattern}{Style.RESET_ALL} {Style.DIM}(x{count}){Style.RESET_ALL}")
