#!/usr/bin/env python3
# Repl.py - osarun entry point and interactive prompt (one line = one script)
import logging
import os
import shlex
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.completion import Completer, Completion

import argparser
import commands
from osascript import Language, OSAScript, OSAScriptError, CommandFailedError

logger = logging.getLogger(__name__)

HISTORY_ENV = "OSARUN_HISTORY"
DEFAULT_HISTORY = ".osarun_history"

# Meta commands (keep in sync with process_meta)
META_COMMANDS = {
    ":lang": "switch language, e.g. :lang js",
    ":as": "switch to AppleScript",
    ":js": "switch to JavaScript",
    ":args": "set script arguments (no value clears them)",
    ":load": "run a script file",
    ":help": "show this help",
    ":quit": "leave the prompt",
    ":exit": "leave the prompt",
}


class ReplState:
    def __init__(self, runner, language=Language.APPLESCRIPT, arguments=None):
        self.runner = runner
        self.language = language
        self.arguments = list(arguments or [])
        self.running = True


def history_path():
    return os.environ.get(HISTORY_ENV) or DEFAULT_HISTORY

def prompt(state):
    return f"osarun[{state.language.parameter}]> "


class MetaCompleter(Completer):
    def get_completions(self, document, complete_event):
        text = document.text_before_cursor.lstrip()
        word = document.get_word_before_cursor(WORD=True)

        # 1. Meta command names, only as the first word of a line
        if text.startswith(":") and text == word:
            for name in sorted(META_COMMANDS):
                if name.startswith(word):
                    yield Completion(name, -len(word), display_meta=META_COMMANDS[name])

        # 2. Language names after :lang
        elif text.startswith(":lang ") and text[len(":lang "):].strip() == word:
            for language in Language:
                if language.parameter.lower().startswith(word.lower()):
                    yield Completion(language.parameter, -len(word))


# -----------------------
# Line processor
# -----------------------
def run_script(state, script):
    try:
        out = state.runner.run(script, state.arguments, state.language)
    except CommandFailedError as e:
        print(f"error: {e.detail or e.message} ({e})", file=sys.stderr)
        return 1
    except OSAScriptError as e:
        print(f"error: {e.message.rstrip()}", file=sys.stderr)
        return 1
    if out:
        print(out, end="" if out.endswith("\n") else "\n")
    return 0

def process_meta(line, state):
    try:
        toks = shlex.split(line)
    except ValueError as e:
        print(f"parse error: {e}", file=sys.stderr)
        return 1
    cmd, rest = toks[0], toks[1:]

    if cmd in (":quit", ":exit"):
        state.running = False
        return 0
    if cmd == ":help":
        for name, text in META_COMMANDS.items():
            print(f"  {name:<7} {text}")
        return 0
    if cmd in (":as", ":js", ":lang"):
        if cmd != ":lang":
            rest = [cmd[1:]]
        if not rest:
            print(state.language.parameter)
            return 0
        try:
            state.language = Language.parse(rest[0])
        except ValueError as e:
            print(f":lang: {e}", file=sys.stderr)
            return 1
        return 0
    if cmd == ":args":
        state.arguments = rest
        return 0
    if cmd == ":load":
        if len(rest) != 1:
            print(":load: usage: :load PATH", file=sys.stderr)
            return 1
        script = commands.read_script(rest[0])
        if script is None:
            return 1
        return run_script(state, script)

    print(f"{cmd}: unknown command (try :help)", file=sys.stderr)
    return 1

def process_line(line, state):
    if not line or not line.strip():
        return 0
    if line.lstrip().startswith(":"):
        return process_meta(line.strip(), state)
    return run_script(state, line)

# -----------------------
# Main loop
# -----------------------
def interactive(runner, language=Language.APPLESCRIPT, arguments=None):
    state = ReplState(runner, language, arguments)
    session = PromptSession(history=FileHistory(history_path()), completer=MetaCompleter())
    logger.debug(f"interactive: {runner!r}")

    while state.running:
        try:
            line = session.prompt(prompt(state))
        except KeyboardInterrupt:
            continue
        except EOFError:
            print()
            break
        process_line(line, state)
    return 0

def main(argv=None):
    parser = argparser.build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s",
                            stream=sys.stderr, force=True)

    if args.interactive:
        if args.expressions:
            parser.error("--interactive cannot be combined with -e")
        # Positionals seed :args, e.g. osarun -i -- a b
        arguments = ([args.file] if args.file is not None else []) + args.args
        if arguments[:1] == ["--"]:
            arguments = arguments[1:]
        return interactive(OSAScript(args.osascript), args.language, arguments)

    func = argparser.select_command(args)
    if func is None:
        if sys.stdin.isatty():
            return interactive(OSAScript(args.osascript), args.language)
        func = commands.run_stdin
    return func(args)

if __name__ == "__main__":
    sys.exit(main())
