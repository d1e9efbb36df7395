from colorama import init as colorama_init, Fore, Style

from .config import ScanConfig
from .models import ScanOutcome, Status

colorama_init(autoreset=True)

SEPARATOR = "-----------------"

STATUS_COLORS = {
    Status.VULNERABLE: Fore.GREEN,
    Status.NOT_VULNERABLE: Fore.RED,
    Status.NOT_FOUND: Fore.RED,
    Status.RESOLUTION_ERROR: Fore.RED,
    Status.HTTP_ERROR: Fore.RED,
    Status.RESPONSE_ERROR: Fore.RED,
}

STATUS_EMOJI = {
    Status.VULNERABLE: "\N{FIRE}",
    Status.NOT_VULNERABLE: "\N{CROSS MARK}",
    Status.NOT_FOUND: "\N{CROSS MARK}",
    Status.RESOLUTION_ERROR: "\N{WARNING SIGN}",
    Status.HTTP_ERROR: "\N{WARNING SIGN}",
    Status.RESPONSE_ERROR: "\N{WARNING SIGN}",
}


class Console:
    """Operator-facing progress lines, one per outcome."""

    def __init__(self, hide_fails: bool = False, emoji: bool = False, stream=None):
        self.hide_fails = hide_fails
        self.emoji = emoji
        self.stream = stream

    def _print(self, msg: str = ""):
        print(msg, file=self.stream)

    def _status(self, status: Status) -> str:
        label = f"{STATUS_COLORS[status]}{status.label}{Style.RESET_ALL}"
        if self.emoji:
            return f"{STATUS_EMOJI[status]} {label}"
        return label

    @staticmethod
    def _toggle(enabled: bool) -> str:
        if enabled:
            return f"[ {Fore.GREEN}Yes{Style.RESET_ALL} ]"
        return f"[ {Fore.RED}No{Style.RESET_ALL} ]"

    def banner(self, config: ScanConfig, target_count: int, fingerprint_count: int):
        self._print(f"[ * ] Loaded {target_count} targets")
        self._print(f"[ * ] Loaded {fingerprint_count} fingerprints")
        if config.output:
            self._print(f"[ * ] Output filename: {config.output}")
            self._print(f"{self._toggle(config.only_vulnerable)} Save only vulnerable subdomains")
        self._print(f"{self._toggle(config.https)} HTTPS by default (--https)")
        self._print(f"[ {config.concurrency} ] Concurrent requests (--concurrency)")
        self._print(f"{self._toggle(config.verify_tls)} Check target only if SSL is valid (--verify-ssl)")
        self._print(f"[ {config.timeout} ] HTTP request timeout (in seconds) (--timeout)")
        self._print(f"{self._toggle(config.hide_fails)} Show only potentially vulnerable subdomains (--hide-fails)")
        self._print(f"[ {config.match_on} ] Fingerprint evidence (--match-on)")
        self._print(f"{self._toggle(config.emoji)} Emoji status markers (--emoji)")
        self._print()

    def outcome(self, outcome: ScanOutcome):
        if outcome.vulnerable:
            fp = outcome.fingerprint
            self._print(SEPARATOR)
            self._print(f"[ {self._status(outcome.status)} ]  -  {outcome.target}  [ {fp.service} ]")
            self._print(f"[ {Fore.BLUE}DISCUSSION{Style.RESET_ALL} ]  -  {fp.discussion_url}")
            self._print(f"[ {Fore.BLUE}DOCUMENTATION{Style.RESET_ALL} ]  -  {fp.documentation_url}")
            self._print(SEPARATOR)
        elif not self.hide_fails:
            self._print(f"[ {self._status(outcome.status)} ]  -  {outcome.target}")

    def info(self, msg: str):
        self._print(f"[ * ] {msg}")
