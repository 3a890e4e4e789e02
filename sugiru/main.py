"""Uses the sugiru lexer/parser/evaluator to interpret .sg files or run in command-line mode. Also uses error handling
context manager. Called from the sugiru console script and from `python -m sugiru`.
"""

import argparse
import os
import sys

from sugiru.lang.error import ErrorHandler
from sugiru.lang.session import Session
from sugiru.lang.shell import Shell


# each sugiru call takes about ten Python frames, so this allows calls nested roughly a thousand deep
RECURSION_LIMIT = 10000


def build_arg_parser():
    parser = argparse.ArgumentParser(prog="sugiru", description="Sugiru interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--mode", choices=Session.MODES, default=Session.EVAL,
                        help="print evaluated values (default), the token stream, or the syntax tree")
    parser.add_argument("--no-color", action="store_true", help="disable colored diagnostics")
    return parser


def main(argv=None):
    """Runs sugiru interpreter."""
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    with ErrorHandler() as error_handler:
        args = build_arg_parser().parse_args(argv)

        if args.no_color:
            os.environ["NO_COLOR"] = "1"  # honored by termcolor

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, mode=args.mode)
            try:
                sess.run()
            finally:  # output of the chunks that ran comes before the error that stopped the run
                while sess.results:
                    print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, mode=args.mode)).cmdloop()
