#!/usr/bin/env python3
# commands.py - CLI actions for osarun

import logging
import sys

from osascript import OSAScript, OSAScriptError, CommandFailedError

logger = logging.getLogger(__name__)

# -----------------------
# Helpers
# -----------------------
def _runner(args):
    return OSAScript(getattr(args, "osascript", None))

def _error(msg):
    print(f"osarun: {msg.rstrip()}", file=sys.stderr)

def execute(runner, script, arguments, language):
    """Run one script and print its output; returns a shell exit code."""
    try:
        out = runner.run(script, arguments, language)
    except CommandFailedError as e:
        _error(f"{e.detail or runner.osascript_path} ({e})")
        return e.status_code
    except OSAScriptError as e:
        _error(str(e))
        return 1
    sys.stdout.write(out)
    sys.stdout.flush()
    return 0

def read_script(path):
    """Return the text of a script file, or None after reporting why it can't be read."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        _error(f"{path}: No such file or directory")
    except IsADirectoryError:
        _error(f"{path}: Is a directory")
    except PermissionError:
        _error(f"{path}: Permission denied")
    except UnicodeDecodeError:
        _error(f"{path}: not a UTF-8 text file")
    return None

# -----------------------
# Commands
# Each function accepts argparse-style 'args' from the parser
# -----------------------
def run_expression(args):
    script = "\n".join(args.expressions)
    logger.debug(f"run_expression: {len(args.expressions)} line(s)")
    return execute(_runner(args), script, args.args, args.language)

def run_file(args):
    script = read_script(args.file)
    if script is None:
        return 1
    logger.debug(f"run_file: {args.file}")
    return execute(_runner(args), script, args.args, args.language)

def run_stdin(args):
    script = sys.stdin.read()
    logger.debug(f"run_stdin: read {len(script)} character(s)")
    return execute(_runner(args), script, args.args, args.language)
