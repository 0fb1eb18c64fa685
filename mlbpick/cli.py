#!/usr/bin/env python3
"""
mlbpick: Pick an MLB game and feed with fzf, then hand it to mlbv.

- Lists games with mlbv (date / no-scores flags are forwarded)
- Pick the game, then the away or home feed
- Prints the mlbv command and runs it (or just prints with --cmd)

Note: needs `fzf` and `mlbv` on PATH.
"""

from __future__ import annotations
import argparse, re, shlex, shutil, subprocess, sys
from dataclasses import dataclass

LISTER = "mlbv"
SELECTOR = "fzf"
HEADER_LINES = 2  # mlbv prints a title row and a column header

DH_MARKER = "DH-"
TEAM_FLAG = "--team"
RECAP_FLAG = "--recaps"
GAME_FLAG = "--game"

HELP = ("-h", "--help")
DEBUG = ("-D", "--debug")
NO_SCORES = ("-n", "--no-scores")
DATE = ("-d", "--date")
RELATIVE_DATES = ("--yesterday", "--tomorrow")
RECAP = "--recap"
CMD_ONLY = "--cmd"

PARENS = re.compile(r"\(([^()]*)\)")

# --- tiny helpers -------------------------------------------------------------

def warn(msg: str):
    print(f"⚠ {msg}", file=sys.stderr)

def debug(enabled: bool, msg: str):
    if enabled:
        print(f"[debug] {msg}", file=sys.stderr)

def usage_parser() -> argparse.ArgumentParser:
    # Only used to format --help; tokens are classified by classify_args
    ap = argparse.ArgumentParser(
        prog="mlbpick",
        description="Pick an MLB game and feed with fzf, then stream it with mlbv",
        epilog="Any other arguments are passed through to mlbv unchanged.",
        add_help=False,
    )
    ap.add_argument("-h", "--help", action="store_true", help="Show this help and exit")
    ap.add_argument("-D", "--debug", action="store_true", help="Print debug info on stderr")
    ap.add_argument("-n", "--no-scores", action="store_true", help="Hide scores in the game list")
    ap.add_argument("-d", "--date", metavar="DATE", help="YYYY-MM-DD (list and stream that date)")
    ap.add_argument("--yesterday", action="store_true", help="Use yesterday's games")
    ap.add_argument("--tomorrow", action="store_true", help="Use tomorrow's games")
    ap.add_argument("--recap", action="store_true", help="Play the recap instead of the game feed")
    ap.add_argument("--cmd", action="store_true", help="Only print the mlbv command, don't run it")
    return ap

# --- arguments ----------------------------------------------------------------

@dataclass(frozen=True)
class ClassifiedArgs:
    list_query_args: tuple[str, ...] = ()
    passthrough_args: tuple[str, ...] = ()
    recap: bool = False
    cmd_only: bool = False
    debug: bool = False

def classify_args(argv: list[str]) -> ClassifiedArgs:
    # Split argv into what mlbv needs to list games vs. what goes on the final command
    query: list[str] = []
    passthrough: list[str] = []
    recap = cmd_only = dbg = False
    i = 0
    while i < len(argv):
        tok = argv[i]
        if tok in HELP:
            usage_parser().print_help()
            raise SystemExit(1)
        elif tok in DEBUG:
            dbg = True
        elif tok in NO_SCORES:
            query.append(tok)
        elif tok in DATE:
            pair = argv[i:i + 2]
            query.extend(pair)
            passthrough.extend(pair)
            i += len(pair)
            continue
        elif tok in RELATIVE_DATES or tok.startswith("--date="):
            query.append(tok)
            passthrough.append(tok)
        elif tok == RECAP:
            recap = True
            passthrough.append(tok)
        elif tok == CMD_ONLY:
            cmd_only = True
        else:
            passthrough.append(tok)
        i += 1
    return ClassifiedArgs(tuple(query), tuple(passthrough), recap, cmd_only, dbg)

# --- selected line ------------------------------------------------------------

@dataclass(frozen=True)
class GameFields:
    away: str
    home: str
    game: str | None = None  # doubleheader index, "1" or "2"

def extract_fields(line: str, verbose: bool = False) -> GameFields:
    """Pull team abbreviations and the doubleheader index out of a listing row.

    Teams are the first two parenthesized groups, in order (away, home). Any
    later group, e.g. ``Final(10)`` for extra innings, is ignored by position
    alone, so a parenthetical placed before the teams would be misread.
    Fewer than two groups leaves the missing teams empty.
    """
    groups = PARENS.findall(line)[:2]
    if len(groups) < 2:
        debug(verbose, f"expected 2 team groups, found {len(groups)} in {line!r}")
    groups += [""] * (2 - len(groups))
    game = None
    at = line.find(DH_MARKER)
    if at >= 0:
        game = line[at + len(DH_MARKER):at + len(DH_MARKER) + 1] or None
    return GameFields(away=groups[0], home=groups[1], game=game)

# --- external tools -----------------------------------------------------------

def require_tools(verbose: bool = False) -> dict[str, str]:
    # Resolve everything up front so we never fetch a list we can't pick from
    found: dict[str, str] = {}
    for name in (SELECTOR, LISTER):
        path = shutil.which(name)
        if not path:
            raise SystemExit(f"{name} not found on PATH; install it and try again")
        debug(verbose, f"{name}: {path}")
        found[name] = path
    return found

def fetch_listing(query_args: tuple[str, ...], verbose: bool = False) -> subprocess.CompletedProcess:
    cmd = [LISTER, *query_args]
    debug(verbose, f"listing: {shlex.join(cmd)}")
    return subprocess.run(cmd, capture_output=True, text=True)

def run_selector(lines: str, prompt: str, header_lines: int = 0, verbose: bool = False) -> str | None:
    # fzf exits 130 on escape and 1 on no match; both count as a cancel
    cmd = [SELECTOR, "--cycle", "--prompt", prompt]
    if header_lines:
        cmd += ["--header-lines", str(header_lines)]
    debug(verbose, f"selector: {shlex.join(cmd)}")
    proc = subprocess.run(cmd, input=lines, stdout=subprocess.PIPE, text=True)
    choice = (proc.stdout or "").strip("\n")
    if proc.returncode != 0 or not choice.strip():
        debug(verbose, f"selector exited {proc.returncode}")
        return None
    return choice

def game_prompt(passthrough: tuple[str, ...]) -> str:
    return shlex.join([LISTER, *passthrough]) + " > "

def select_game(listing: str, args: ClassifiedArgs) -> str | None:
    return run_selector(listing, game_prompt(args.passthrough_args),
                        header_lines=HEADER_LINES, verbose=args.debug)

def select_feed(fields: GameFields, verbose: bool = False) -> str | None:
    return run_selector(f"{fields.away}\n{fields.home}\n", "feed> ", verbose=verbose)

# --- final command ------------------------------------------------------------

def build_command(args: ClassifiedArgs, fields: GameFields, feed: str) -> list[str]:
    cmd = [LISTER, RECAP_FLAG if args.recap else TEAM_FLAG, feed]
    if fields.game:
        cmd += [GAME_FLAG, fields.game]
    cmd.extend(args.passthrough_args)
    return cmd

def run_command(cmd: list[str]) -> int:
    try:
        return subprocess.run(cmd).returncode
    except KeyboardInterrupt:
        print("\nBye.")
        return 0

# --- cli ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    args = classify_args(sys.argv[1:] if argv is None else list(argv))
    debug(args.debug, f"classified: {args}")
    require_tools(args.debug)

    listing = fetch_listing(args.list_query_args, args.debug)
    if listing.returncode != 0:
        warn(f"{LISTER} exited {listing.returncode}: {(listing.stderr or '').strip()}")
        return listing.returncode
    if not (listing.stdout or "").strip():
        print("No games listed.")
        return 0

    line = select_game(listing.stdout, args)
    if line is None:
        print("No game selected.")
        return 0
    fields = extract_fields(line, args.debug)
    debug(args.debug, f"fields: {fields}")

    feed = select_feed(fields, args.debug)
    if feed is None:
        print("No feed selected.")
        return 0

    cmd = build_command(args, fields, feed)
    print(shlex.join(cmd))
    if args.cmd_only:
        return 0
    return run_command(cmd)

if __name__ == "__main__":
    sys.exit(main())
