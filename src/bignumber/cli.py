# src/bignumber/cli.py

"""
BigNumber - arbitrary-precision integer calculator

Description:
    Evaluates integer expressions of any length with + - * / %, and the
    factorial, Fibonacci and Catalan sequences. Runs once on the
    expression given on the command line, or as an interactive shell.

usage: see bignumber -h
"""

from __future__ import annotations

import argparse
import sys
import textwrap
import time
import traceback
from collections.abc import Callable
from typing import NamedTuple

from colorama import Fore, Style
from colorama import init as colorama_init

from bignumber import __version__ as _ver
from bignumber import config as CONFIG
from bignumber.exceptions import BigNumberError, UserInputError
from bignumber.expreval import evaluate
from bignumber.number import BigNumber
from bignumber.output_manager import OutputManager, validate_output_setting
from bignumber.runtime import APPLY, CFG
from bignumber.runtime import current as _rt_current
from bignumber.sequences import SequenceMemo, default_memo
from bignumber.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir


# In memory session history
class HistoryItem(NamedTuple):
    expr: str
    result: str
    profile: str | None
    timestamp: float


_HISTORY: list[HistoryItem] = []


def add_to_history(expr: str, result: str, profile: str | None = None) -> None:
    _HISTORY.append(HistoryItem(expr=expr, result=result, profile=profile, timestamp=time.time()))


def get_history() -> list[HistoryItem]:
    return list(_HISTORY)


def clear_history() -> None:
    _HISTORY.clear()


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _print_input_error(msg: str) -> None:
    prefix = f"{Fore.RED}Invalid input:{Style.RESET_ALL}"
    print(f"{prefix} {msg}", file=sys.stderr)


def _debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"[debug] {msg}", file=sys.stderr)


def _memo_sizes_line(memo: SequenceMemo) -> str:
    return ", ".join(f"{k}={v}" for k, v in memo.sizes().items())


HELP_TEXT = textwrap.dedent("""\
    Enter an expression, a command or a profile name.

    expressions
      123456789 * 987654321      + - * / % and parentheses
      -7 / 2                     '/' and '%' truncate toward zero (-3, -1)
      100!  fact(100)            factorial
      fib(500)  catalan(40)      Fibonacci and Catalan numbers
      1_000_000 * 3              '_' may group digits

    commands
      menu             numbered menu (add, subtract, ..., Catalan)
      cache            show how many sequence values are cached
      hist             show this session's results
      p                list profiles
      debug on|off     toggle [debug] lines
      h                this help
      q                quit
    """)


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create the workspace folder and copy packaged profiles if missing.

      where
          Show the workspace path.

      profiles
          List the available profiles.
    """)

    p = argparse.ArgumentParser(
        prog="bignumber",
        description="BigNumber — arbitrary-precision integer calculator",
        usage=(
            "bignumber [expression ...] [--profile NAME] [--output FILE] [--quiet] [--debug]\n"
            "       bignumber init | where | profiles\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="expression",
                   help="expression to evaluate once (omit for the interactive shell)")
    p.add_argument("--profile", default=None, help="Profile to apply (default: last used, else 'default')")
    p.add_argument("--output", default=None, help="Append results to a file (also prints unless --quiet)")
    p.add_argument("--quiet", action="store_true", help="Do not print results to the screen")
    p.add_argument("--debug", action="store_true", help="Show timings, cache sizes and tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_input_error(str(e))
        return 2
    except BigNumberError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if "--debug" in (argv if argv is not None else sys.argv):
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _select_profile_name(explicit: str | None) -> str:
    """
    Precedence:
      1) explicit --profile
      2) last used (from workspace)
      3) 'default'
    """
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


def _apply_profile(name: str) -> None:
    selected = CONFIG.load_settings(name)
    debug = _rt_current().debug
    APPLY(selected)
    # --debug on the command line wins over the profile
    _rt_current().debug = debug or _rt_current().debug
    _debug(f"active profile: {selected.name}")
    if selected._source:
        _debug(f"profile file: {selected._source}")


def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    try:
        validate_output_setting(args.output)
    except ValueError as e:
        print(f"Fatal error in --output: {e}", file=sys.stderr)
        return 1

    ensure_workspace_seeded()

    command = args.items[0].lower() if len(args.items) == 1 else None
    if command == "init":
        ws, copied = seed_workspace(overwrite=False)
        print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied.get('profiles', 0)}")
        return 0
    if command == "where":
        print(f"Workspace: {workspace_dir()}")
        return 0
    if command == "profiles":
        print_profiles_with_descriptions()
        return 0

    if args.profile and not CONFIG.has_profile(args.profile):
        print(f"Unknown profile: '{args.profile}'")
        print("Available profiles:", ", ".join(CONFIG.list_all_profiles()))
        return 2

    profile_name = _select_profile_name(args.profile)
    if CONFIG.has_profile(profile_name):
        _apply_profile(profile_name)

    def make_output_manager() -> OutputManager:
        # read OUTPUT_FILE from runtime each time so profile switches take effect
        target = args.output if args.output is not None else CFG("OUTPUT.OUTPUT_FILE", None)
        return OutputManager(output_file=target, quiet=args.quiet)

    memo = default_memo()

    # --- one-shot expression ---
    if args.items:
        om = make_output_manager()
        try:
            _evaluate_and_print(" ".join(args.items), memo, om)
        finally:
            om.close()
        return 0

    return _repl(profile_name, memo, make_output_manager)


def _evaluate_and_print(expr: str, memo: SequenceMemo, om: OutputManager) -> str:
    t0 = time.perf_counter()
    value = str(evaluate(expr, memo))
    _debug(f"evaluated in {(time.perf_counter() - t0) * 1000:.1f} ms; cached: {_memo_sizes_line(memo)}")
    om.result(expr.strip(), value)
    return value


def print_profiles_with_descriptions() -> None:
    items = CONFIG.list_profiles_with_descriptions()
    if not items:
        print("No profiles found.")
        return
    width = max(len(nm) for nm, _ in items)
    for nm, desc in items:
        print(f"  {Fore.YELLOW}{nm:<{width}}{Style.RESET_ALL}  {desc}")


# ---- REPL ----
def _repl(profile_name: str, memo: SequenceMemo, make_output_manager: Callable[[], OutputManager]) -> int:
    print(f"{Fore.YELLOW}{Style.BRIGHT}BigNumber v{_ver} — arbitrary-precision integer calculator{Style.RESET_ALL}")

    current_profile = profile_name
    while True:
        try:
            prompt = f"\nProfile: {current_profile} — Enter an expression, command or profile (h=Help, q=Quit): "
            user_input = input(prompt).strip()

            low = user_input.lower()
            if low in {"", "q", "quit", "exit"}:
                break

            if low in {"h", "help"}:
                print(HELP_TEXT)
                continue

            if low in {"p", "profiles"}:
                print_profiles_with_descriptions()
                continue

            if low == "cache":
                print(f"Cached values: {_memo_sizes_line(memo)}")
                continue

            if low in {"hist", "history"}:
                hist = get_history()
                if not hist:
                    print("History is empty.")
                    continue
                for item in hist:
                    ts = time.strftime("%H:%M:%S", time.localtime(item.timestamp))
                    print(f"{ts}  {item.expr} = {item.result}  profile={item.profile or '-'}")
                continue

            if low.startswith("debug"):
                parts = low.split()
                rt = _rt_current()
                if len(parts) == 1 or parts[1] == "status":
                    print(f"Debug is currently {'ON' if rt.debug else 'OFF'}.")
                elif parts[1] == "on":
                    rt.debug = True
                    print("Debug mode enabled for this session.")
                elif parts[1] == "off":
                    rt.debug = False
                    print("Debug mode disabled for this session.")
                else:
                    print("Usage: DEBUG [on|off|status]")
                continue

            if low == "menu":
                om = make_output_manager()
                try:
                    run_menu(memo, om)
                finally:
                    om.close()
                continue

            # profile switch?
            if CONFIG.has_profile(user_input):
                try:
                    _apply_profile(user_input)
                except UserInputError as e:
                    _print_user_error(f"Failed to load profile '{user_input}': {e}")
                    continue
                CONFIG.write_current_profile(user_input)
                current_profile = user_input
                print(f"Applied profile: {current_profile}")
                continue

            om = make_output_manager()
            try:
                value = _evaluate_and_print(user_input, memo, om)
                add_to_history(user_input, value, current_profile)
            except UserInputError as e:
                _print_input_error(str(e))
            except BigNumberError as e:
                _print_user_error(str(e))
            finally:
                om.close()

        except (EOFError, KeyboardInterrupt):
            print()
            break
        except Exception as e:
            if _rt_current().debug:
                traceback.print_exc()
            else:
                _print_user_error(f"{e.__class__.__name__}: {e}")
            continue
    return 0


# ---- numbered menu ----
_MENU = textwrap.dedent("""\
    Select an operation:
    1. Addition
    2. Subtraction
    3. Multiplication
    4. Division
    5. Factorial
    6. Fibonacci
    7. Catalan
    8. Exit""")

_MENU_BINARY = {
    "1": ("+", lambda a, b: a + b),
    "2": ("-", lambda a, b: a - b),
    "3": ("*", lambda a, b: a * b),
    "4": ("/", lambda a, b: a / b),
}
_MENU_SEQUENCES = {
    "5": ("Factorial", SequenceMemo.factorial),
    "6": ("Fibonacci", SequenceMemo.fibonacci),
    "7": ("Catalan", SequenceMemo.catalan),
}


def _read_index(text: str) -> int | None:
    """Parse n for the sequence entries; None (after a message) if unusable."""
    try:
        n = int(text.strip())
    except ValueError:
        _print_input_error(f"'{text.strip()}' is not an integer.")
        return None
    if n < 0:
        _print_input_error("n must be non-negative.")
        return None
    limit = int(CFG("BEHAVIOUR.MAX_INDEX", 5_000))
    if n > limit:
        _print_input_error(f"n = {n} is above BEHAVIOUR.MAX_INDEX ({limit}).")
        return None
    return n


def run_menu(memo: SequenceMemo, om: OutputManager) -> None:
    """Numbered menu: two numbers for 1-4, an index for 5-7, 8 leaves."""
    while True:
        print()
        print(_MENU)
        choice = input("Choice: ").strip()
        if choice == "8":
            return

        if choice in _MENU_BINARY:
            sym, fn = _MENU_BINARY[choice]
            try:
                a = BigNumber(input("Enter first number: ").strip())
                b = BigNumber(input("Enter second number: ").strip())
                om.result(f"{a} {sym} {b}", str(fn(a, b)))
            except BigNumberError as e:
                _print_user_error(str(e))
            continue

        if choice in _MENU_SEQUENCES:
            name, fn = _MENU_SEQUENCES[choice]
            n = _read_index(input("Enter n: "))
            if n is not None:
                om.result(f"{name}({n})", str(fn(memo, n)))
            continue

        print("Invalid choice. Back to the main prompt.")
        return


if __name__ == "__main__":
    raise SystemExit(main())
