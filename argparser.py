# argparser.py
import argparse
import commands
from osascript import Language


def language_arg(text):
    try:
        return Language.parse(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser():
    parser = argparse.ArgumentParser(
        prog="osarun",
        description="Run AppleScript or JavaScript (JXA) through osascript.",
    )

    parser.add_argument("-l", "--language", type=language_arg, default=Language.APPLESCRIPT,
                        help="AppleScript (default) or JavaScript; as/js/jxa also accepted")
    # Each -e is one line of the script, as with osascript itself
    parser.add_argument("-e", "--expression", dest="expressions", action="append",
                        metavar="SCRIPT", help="script line to run (repeatable)")
    parser.add_argument("--osascript", metavar="PATH", default=None,
                        help="interpreter to run instead of /usr/bin/osascript")
    parser.add_argument("-i", "--interactive", action="store_true",
                        help="start the interactive prompt")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug output to stderr")
    parser.add_argument("file", nargs="?", default=None,
                        help="script file to run, or - for stdin")
    parser.add_argument("args", nargs=argparse.REMAINDER,
                        help="arguments passed to the script's run handler")
    return parser


def select_command(args):
    """Pick the commands.* function that should handle parsed args."""
    if args.expressions:
        # With -e, the positional "file" slot is really the first script argument
        if args.file is not None:
            args.args = [args.file, *args.args]
            args.file = None
        return commands.run_expression
    if args.file == "-":
        return commands.run_stdin
    if args.file is not None:
        return commands.run_file
    return None
