"""Runs raga statements from a .raga file or in command-line mode. Also uses error handling context manager. Called
from the raga console script.
"""

import argparse

from raga.lang.error import ErrorHandler
from raga.lang.session import Session
from raga.lang.shell import Shell


def main():
    """Runs raga interpreter. Called from raga console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="raga")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        args = parser.parse_args()

        if args.file is not None:
            Session(error_handler, args.file, cmd_line=False).run()  # prints each result as it goes

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
